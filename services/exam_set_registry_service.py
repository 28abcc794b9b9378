"""
Exam Set Registry Service
"""

import logging
import threading
import uuid
from dataclasses import replace
from typing import Dict, List, Optional

from models.category import DEFAULT_DISTRIBUTION
from models.exam_set import ExamSet
from models.timestamps import utcnow

logger = logging.getLogger(__name__)

STANDARD_EXAM_SET_NAME = "ข้อสอบมาตรฐาน"
STANDARD_EXAM_SET_DESCRIPTION = "ข้อสอบเต็มรูปแบบ 150 ข้อ ครอบคลุม 6 หมวดวิชา"

_UPDATABLE_FIELDS = ("name", "description", "category_distribution", "is_active")


class ExamSetRegistryService:
    """
    CRUD over named category-distribution templates. Distribution totals are
    not checked here; the exam generator scales oversized sets down.
    """

    def __init__(self):
        self._exam_sets: Dict[str, ExamSet] = {}
        self._lock = threading.Lock()

    def list(self, active_only: bool = False) -> List[ExamSet]:
        with self._lock:
            exam_sets = list(self._exam_sets.values())
        if active_only:
            exam_sets = [s for s in exam_sets if s.is_active]
        return sorted(exam_sets, key=lambda s: s.created_at)

    def get(self, exam_set_id: str) -> Optional[ExamSet]:
        with self._lock:
            return self._exam_sets.get(exam_set_id)

    def create(self,
               name: str,
               description: str,
               category_distribution: Dict[str, int],
               is_active: bool = True) -> ExamSet:
        _check_counts(category_distribution)
        exam_set = ExamSet(
            exam_set_id=str(uuid.uuid4()),
            name=name,
            description=description,
            category_distribution=dict(category_distribution),
            is_active=is_active,
            created_at=utcnow(),
        )
        with self._lock:
            self._exam_sets[exam_set.exam_set_id] = exam_set
        return exam_set

    def update(self, exam_set_id: str, **changes) -> Optional[ExamSet]:
        unknown = set(changes) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown exam set fields: {sorted(unknown)}")
        if changes.get("category_distribution") is not None:
            _check_counts(changes["category_distribution"])

        with self._lock:
            existing = self._exam_sets.get(exam_set_id)
            if existing is None:
                return None
            fields = {k: v for k, v in changes.items() if v is not None}
            if "category_distribution" in fields:
                fields["category_distribution"] = dict(fields["category_distribution"])
            updated = replace(existing, **fields)
            self._exam_sets[exam_set_id] = updated
            return updated

    def delete(self, exam_set_id: str) -> bool:
        with self._lock:
            return self._exam_sets.pop(exam_set_id, None) is not None

    def seed_standard(self) -> ExamSet:
        """Register the standard 150-question set unless one with that name exists"""
        for exam_set in self.list():
            if exam_set.name == STANDARD_EXAM_SET_NAME:
                return exam_set
        exam_set = self.create(
            name=STANDARD_EXAM_SET_NAME,
            description=STANDARD_EXAM_SET_DESCRIPTION,
            category_distribution=DEFAULT_DISTRIBUTION,
        )
        logger.info("Seeded standard exam set %s", exam_set.exam_set_id)
        return exam_set


def _check_counts(distribution: Dict[str, int]) -> None:
    for category, count in distribution.items():
        if count < 0:
            raise ValueError(f"Negative question count for category {category!r}: {count}")
