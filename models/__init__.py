"""
Models module - domain records
"""

from .question import Question
from .exam_set import ExamSet
from .score import Score, CategoryResult
from .exam_session import ExamSession, SessionStatus
from .category import Category, Difficulty

__all__ = [
    'Question',
    'ExamSet',
    'Score',
    'CategoryResult',
    'ExamSession',
    'SessionStatus',
    'Category',
    'Difficulty'
]
