"""
Question Model
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from models.timestamps import utcnow

OPTION_COUNT = 4


@dataclass
class Question:
    """A multiple-choice question in the bank"""
    question_id: str
    question_text: str
    options: List[str]
    correct_answer_index: int
    explanation: str
    category: str
    difficulty: str
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """
        Options are label-significant (index 0..3 map to a..d), so a question
        always carries exactly four of them and the correct index must point
        inside that list.
        """
        if len(self.options) != OPTION_COUNT:
            raise ValueError(
                f"Question must have exactly {OPTION_COUNT} options, got {len(self.options)}"
            )
        if not 0 <= self.correct_answer_index < len(self.options):
            raise ValueError(
                f"correct_answer_index out of range: {self.correct_answer_index}"
            )
        self.options = list(self.options)
