"""
Score History Service - append-only score records, CSV export and admin statistics
"""

import csv
import io
import logging
import threading
import uuid
from typing import Dict, List, Optional

import numpy as np

from models.score import CategoryResult, Score, percentage, round_half_up
from models.timestamps import utcnow

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Date",
    "Exam Type",
    "Total Score (%)",
    "Correct Answers",
    "Total Questions",
    "Time Spent (min)",
]


class ScoreHistoryService:
    """
    Stores one Score per submitted attempt. Records are never updated or
    deleted; date_taken is stamped here, not by the caller.
    """

    def __init__(self):
        self._scores: Dict[str, Score] = {}
        self._lock = threading.Lock()

    def create(self,
               total_questions: int,
               correct_answers: int,
               time_spent: int,
               exam_type: str,
               answers_given: Optional[Dict[str, int]] = None,
               category_breakdown: Optional[Dict[str, CategoryResult]] = None,
               exam_set_id: Optional[str] = None,
               session_id: Optional[str] = None) -> Score:
        if total_questions < 0 or correct_answers < 0 or time_spent < 0:
            raise ValueError("Score counts and time spent must be non-negative")
        if correct_answers > total_questions:
            raise ValueError(
                f"correct_answers ({correct_answers}) exceeds total_questions ({total_questions})"
            )

        score = Score(
            score_id=str(uuid.uuid4()),
            total_score=percentage(correct_answers, total_questions),
            total_questions=total_questions,
            correct_answers=correct_answers,
            time_spent=time_spent,
            exam_type=exam_type,
            date_taken=utcnow(),
            exam_set_id=exam_set_id,
            answers_given=dict(answers_given or {}),
            category_breakdown=dict(category_breakdown or {}),
            session_id=session_id,
        )
        with self._lock:
            if session_id is not None:
                existing = self._find_by_session(session_id)
                if existing is not None:
                    return existing
            self._scores[score.score_id] = score

        logger.info(
            "Recorded score %s: %d/%d (%d%%) for %s",
            score.score_id, correct_answers, total_questions, score.total_score, exam_type,
        )
        return score

    def list(self, limit: Optional[int] = None) -> List[Score]:
        """Scores newest first; a positive limit keeps only the most recent ones"""
        with self._lock:
            scores = list(self._scores.values())
        scores.sort(key=lambda s: s.date_taken, reverse=True)
        if limit is not None and limit > 0:
            scores = scores[:limit]
        return scores

    def get(self, score_id: str) -> Optional[Score]:
        with self._lock:
            return self._scores.get(score_id)

    def get_by_session(self, session_id: str) -> Optional[Score]:
        with self._lock:
            return self._find_by_session(session_id)

    def _find_by_session(self, session_id: str) -> Optional[Score]:
        for score in self._scores.values():
            if score.session_id == session_id:
                return score
        return None

    def export_csv(self) -> str:
        """
        Export score history as CSV, newest first

        Columns: Date, Exam Type, Total Score (%), Correct Answers,
        Total Questions, Time Spent (min)
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_HEADERS)
        for score in self.list():
            writer.writerow([
                score.date_taken.date().isoformat(),
                score.exam_type,
                score.total_score,
                score.correct_answers,
                score.total_questions,
                score.time_spent_minutes,
            ])
        return buffer.getvalue()

    def stats(self, total_questions: int) -> Dict[str, int]:
        """
        Dashboard numbers for the admin page

        Args:
            total_questions: Current size of the question bank

        Returns:
            totalQuestions, totalExams, averageScore (rounded mean percentage)
            and averageTime (rounded mean seconds)
        """
        scores = self.list()
        if not scores:
            return {
                "totalQuestions": total_questions,
                "totalExams": 0,
                "averageScore": 0,
                "averageTime": 0,
            }

        ratios = np.array([
            s.correct_answers / s.total_questions if s.total_questions > 0 else 0.0
            for s in scores
        ])
        times = np.array([s.time_spent for s in scores])

        return {
            "totalQuestions": total_questions,
            "totalExams": len(scores),
            "averageScore": int(np.floor(np.mean(ratios) * 100 + 0.5)),
            "averageTime": round_half_up(int(times.sum()), len(scores)),
        }
