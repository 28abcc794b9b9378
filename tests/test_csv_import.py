from __future__ import annotations

import pytest

from services.csv_import_service import CsvImportService

HEADER = "subject,question,option_a,option_b,option_c,option_d,correct_answer,explanation\n"


@pytest.fixture
def importer(repository):
    return CsvImportService(repository)


def test_valid_rows_are_all_imported(importer, repository):
    content = HEADER + (
        "ภาษาไทย,คำว่า สุจริต หมายถึง?,ซื่อสัตย์,ขี้โกง,ขี้โมโห,ขี้อาย,a,ซื่อสัตย์\n"
        "ภาษาอังกฤษ,Pick the verb,run,blue,cat,soft,A,run is a verb\n"
        "ความสามารถทั่วไป,2+2?,3,4,5,6,b,basic\n"
    )

    result = importer.import_questions(content)

    assert (result.success, result.errors) == (3, 0)
    english = repository.list(category="ภาษาอังกฤษ")[0]
    assert english.correct_answer_index == 0
    assert english.options == ["run", "blue", "cat", "soft"]
    assert english.difficulty == "ปานกลาง"


def test_bad_rows_are_counted_and_skipped(importer, repository):
    content = HEADER + (
        "ภาษาไทย,good,1,2,3,4,d,ok\n"
        "ภาษาไทย,too few columns,1,2,3\n"
        "ภาษาไทย,bad letter,1,2,3,4,e,nope\n"
        ",missing subject,1,2,3,4,a,nope\n"
        "\n"
        "ภาษาไทย,also good,1,2,3,4,C,ok\n"
    )

    result = importer.import_questions(content)

    assert (result.success, result.errors) == (2, 3)
    assert {q.correct_answer_index for q in repository.list()} == {3, 2}


def test_quoted_fields_keep_commas(importer, repository):
    content = HEADER + 'ภาษาอังกฤษ,"Choose one, please","a, b",c,d,e,b,"because, reasons"\n'

    result = importer.import_questions(content)

    assert result.success == 1
    question = repository.list()[0]
    assert question.question_text == "Choose one, please"
    assert question.options[0] == "a, b"


def test_bytes_with_bom_are_decoded(importer):
    content = (HEADER + "ภาษาไทย,q,1,2,3,4,a,e\n").encode("utf-8-sig")

    result = importer.import_questions(content)

    assert (result.success, result.errors) == (1, 0)


def test_header_only_and_empty_files(importer):
    assert importer.import_questions(HEADER).success == 0
    assert importer.import_questions("").errors == 0


def test_parse_row_rejects_unknown_answer_letter():
    with pytest.raises(ValueError):
        CsvImportService.parse_row(["s", "q", "1", "2", "3", "4", "x", "e"])
