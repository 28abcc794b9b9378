from __future__ import annotations

import csv
import io
from datetime import datetime, timedelta, timezone

from models.score import CategoryResult
from services.score_history_service import EXPORT_HEADERS


def test_list_is_newest_first_with_limit(history):
    first = history.create(total_questions=10, correct_answers=5, time_spent=60, exam_type="a")
    second = history.create(total_questions=10, correct_answers=7, time_spent=60, exam_type="b")
    first.date_taken = datetime(2024, 1, 1)
    second.date_taken = datetime(2024, 1, 2)

    assert [s.exam_type for s in history.list()] == ["b", "a"]
    assert [s.exam_type for s in history.list(limit=1)] == ["b"]


def test_date_taken_is_naive_utc(history):
    before = datetime.now(timezone.utc).replace(tzinfo=None)
    score = history.create(total_questions=1, correct_answers=1, time_spent=5, exam_type="x")
    after = datetime.now(timezone.utc).replace(tzinfo=None)

    assert score.date_taken.tzinfo is None
    assert before - timedelta(seconds=1) <= score.date_taken <= after + timedelta(seconds=1)


def test_session_id_makes_create_idempotent(history):
    first = history.create(total_questions=2, correct_answers=1, time_spent=5, exam_type="x", session_id="s1")
    again = history.create(total_questions=2, correct_answers=2, time_spent=5, exam_type="x", session_id="s1")

    assert again.score_id == first.score_id
    assert len(history.list()) == 1
    assert history.get_by_session("s1") is first


def test_export_csv_columns_and_values(history):
    score = history.create(
        total_questions=150,
        correct_answers=120,
        time_spent=5400,
        exam_type="สอบเต็มรูปแบบ, รอบ 1",
        category_breakdown={"ภาษาไทย": CategoryResult(correct=20, total=25)},
    )
    score.date_taken = datetime(2024, 5, 17, 13, 45)

    rows = list(csv.reader(io.StringIO(history.export_csv())))

    assert rows[0] == EXPORT_HEADERS
    assert rows[1] == ["2024-05-17", "สอบเต็มรูปแบบ, รอบ 1", "80", "120", "150", "90"]


def test_export_with_zero_question_score(history):
    history.create(total_questions=0, correct_answers=0, time_spent=30, exam_type="empty")

    rows = list(csv.reader(io.StringIO(history.export_csv())))

    assert rows[1][2] == "0"
    assert rows[1][5] == "1"


def test_stats_without_scores(history):
    assert history.stats(total_questions=12) == {
        "totalQuestions": 12,
        "totalExams": 0,
        "averageScore": 0,
        "averageTime": 0,
    }


def test_stats_averages(history):
    history.create(total_questions=4, correct_answers=3, time_spent=100, exam_type="a")
    history.create(total_questions=2, correct_answers=1, time_spent=201, exam_type="b")
    history.create(total_questions=0, correct_answers=0, time_spent=0, exam_type="c")

    stats = history.stats(total_questions=50)

    assert stats["totalExams"] == 3
    # (0.75 + 0.5 + 0) / 3 = 41.67%
    assert stats["averageScore"] == 42
    assert stats["averageTime"] == 100
