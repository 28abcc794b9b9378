"""
ExamSet Model
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict

from models.timestamps import utcnow


@dataclass
class ExamSet:
    """Named, reusable category distribution template"""
    exam_set_id: str
    name: str
    description: str
    category_distribution: Dict[str, int]
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)

    @property
    def total_questions(self) -> int:
        return sum(self.category_distribution.values())
