"""
CSV Import Service - bulk question import
"""

import csv
import io
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from models.category import Difficulty
from services.question_repository_service import QuestionRepositoryService

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "subject",
    "question",
    "option_a",
    "option_b",
    "option_c",
    "option_d",
    "correct_answer",
    "explanation",
]

ANSWER_LETTERS = {"a": 0, "b": 1, "c": 2, "d": 3}


@dataclass
class ImportResult:
    success: int = 0
    errors: int = 0


class CsvImportService:
    """
    Imports questions from CSV. Each row is handled on its own: a malformed
    row is skipped and counted, the rest of the file still goes in.
    """

    def __init__(self, repository: QuestionRepositoryService):
        self.repository = repository

    @staticmethod
    def parse_row(columns: List[str]) -> Dict:
        """
        Convert one CSV row into question fields

        Args:
            columns: subject, question, option_a..option_d, correct_answer, explanation

        Returns:
            Keyword arguments for QuestionRepositoryService.create

        Raises:
            ValueError: too few columns, empty field, or answer letter outside a-d
        """
        if len(columns) < len(CSV_COLUMNS):
            raise ValueError(f"expected {len(CSV_COLUMNS)} columns, got {len(columns)}")

        values = [c.strip() for c in columns[:len(CSV_COLUMNS)]]
        row = dict(zip(CSV_COLUMNS, values))

        empty = [name for name in CSV_COLUMNS if name != "explanation" and not row[name]]
        if empty:
            raise ValueError(f"empty fields: {', '.join(empty)}")

        answer = row["correct_answer"].lower()
        if answer not in ANSWER_LETTERS:
            raise ValueError(f"correct_answer must be one of a-d, got {row['correct_answer']!r}")

        return {
            "question_text": row["question"],
            "options": [row["option_a"], row["option_b"], row["option_c"], row["option_d"]],
            "correct_answer_index": ANSWER_LETTERS[answer],
            "explanation": row["explanation"],
            "category": row["subject"],
            "difficulty": Difficulty.MEDIUM.value,
        }

    def parse(self, content: Union[str, bytes]) -> Tuple[List[Dict], int]:
        """
        Parse a whole file. The first line is the header and is skipped;
        blank lines are ignored.

        Returns:
            (valid rows, number of rejected rows)
        """
        text = _decode(content)
        reader = csv.reader(io.StringIO(text))

        rows: List[Dict] = []
        errors = 0
        header: Optional[List[str]] = next(reader, None)
        if header is None:
            return rows, errors

        for line_no, columns in enumerate(reader, start=2):
            if not any(c.strip() for c in columns):
                continue
            try:
                rows.append(self.parse_row(columns))
            except ValueError as e:
                logger.debug("CSV line %d rejected: %s", line_no, e)
                errors += 1
        return rows, errors

    def import_questions(self, content: Union[str, bytes]) -> ImportResult:
        rows, parse_errors = self.parse(content)
        success, create_errors = self.repository.create_many(rows)
        result = ImportResult(success=success, errors=parse_errors + create_errors)
        logger.info("CSV import finished: %d imported, %d rejected", result.success, result.errors)
        return result


def _decode(content: Union[str, bytes]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8-sig")
    return content.lstrip("\ufeff")
