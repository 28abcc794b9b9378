"""
Score Model
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from models.timestamps import utcnow


@dataclass
class CategoryResult:
    """Correct/total tally for one category"""
    correct: int = 0
    total: int = 0


@dataclass
class Score:
    """Persisted result of one completed exam attempt"""
    score_id: str
    total_score: int
    total_questions: int
    correct_answers: int
    time_spent: int
    exam_type: str
    date_taken: datetime = field(default_factory=utcnow)
    exam_set_id: Optional[str] = None
    answers_given: Dict[str, int] = field(default_factory=dict)
    category_breakdown: Dict[str, CategoryResult] = field(default_factory=dict)
    session_id: Optional[str] = None

    @property
    def time_spent_minutes(self) -> int:
        return round_half_up(self.time_spent, 60)


def round_half_up(numerator: int, denominator: int) -> int:
    """Integer round-half-up of numerator / denominator for non-negative inputs"""
    if denominator <= 0:
        return 0
    return (2 * numerator + denominator) // (2 * denominator)


def percentage(correct: int, total: int) -> int:
    """
    Percentage of correct answers, rounded half up.
    An empty exam scores 0 instead of dividing by zero.
    """
    if total <= 0:
        return 0
    return round_half_up(correct * 100, total)
