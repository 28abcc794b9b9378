"""
ExamSession Model

Snapshot of one exam attempt. The server never stores it; the client sends
the snapshot back on every interaction.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from models.question import Question


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


@dataclass
class ExamSession:
    """Client-held exam attempt"""
    session_id: str
    questions: List[Question]
    duration_seconds: int
    exam_type: str
    status: SessionStatus = SessionStatus.NOT_STARTED
    answers: Dict[str, int] = field(default_factory=dict)
    bookmarked_question_ids: List[str] = field(default_factory=list)
    current_question_index: int = 0
    started_at: Optional[datetime] = None
    exam_set_id: Optional[str] = None
    score_id: Optional[str] = None

    def question_ids(self) -> List[str]:
        return [q.question_id for q in self.questions]
