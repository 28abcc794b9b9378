"""
Question Repository Service
"""

import logging
import threading
import uuid
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from models.category import ALL_FILTER, Difficulty
from models.question import Question
from models.timestamps import utcnow

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = (
    "question_text",
    "options",
    "correct_answer_index",
    "explanation",
    "category",
    "difficulty",
)


class QuestionRepositoryService:
    """
    In-memory question bank: CRUD, filtered listing and random sampling by
    category quota
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()
        self._questions: Dict[str, Question] = {}
        self._lock = threading.Lock()

    def list(self,
             category: Optional[str] = None,
             difficulty: Optional[str] = None,
             search: Optional[str] = None) -> List[Question]:
        """
        List questions matching every given filter

        Args:
            category: Exact category label; None or "all" disables the filter
            difficulty: Exact difficulty label; None or "all" disables the filter
            search: Case-insensitive substring of the question text or explanation

        Returns:
            Matching questions, most recently created first
        """
        with self._lock:
            questions = list(self._questions.values())

        if category and category != ALL_FILTER:
            questions = [q for q in questions if q.category == category]

        if difficulty and difficulty != ALL_FILTER:
            questions = [q for q in questions if q.difficulty == difficulty]

        if search:
            needle = search.lower()
            questions = [
                q for q in questions
                if needle in q.question_text.lower() or needle in q.explanation.lower()
            ]

        return sorted(questions, key=lambda q: q.created_at, reverse=True)

    def get(self, question_id: str) -> Optional[Question]:
        with self._lock:
            return self._questions.get(question_id)

    def get_many(self, question_ids: Iterable[str]) -> Dict[str, Question]:
        with self._lock:
            return {qid: self._questions[qid] for qid in question_ids if qid in self._questions}

    def create(self,
               question_text: str,
               options: List[str],
               correct_answer_index: int,
               explanation: str,
               category: str,
               difficulty: str = Difficulty.MEDIUM.value,
               created_at: Optional[datetime] = None) -> Question:
        question = Question(
            question_id=str(uuid.uuid4()),
            question_text=question_text,
            options=options,
            correct_answer_index=correct_answer_index,
            explanation=explanation,
            category=category,
            difficulty=difficulty,
            created_at=created_at or utcnow(),
        )
        with self._lock:
            self._questions[question.question_id] = question
        return question

    def create_many(self, rows: Iterable[Dict]) -> Tuple[int, int]:
        """
        Create one question per row; a row that fails does not stop the batch.

        Returns:
            (success, errors)
        """
        success = 0
        errors = 0
        for row in rows:
            try:
                self.create(**row)
                success += 1
            except (TypeError, ValueError) as e:
                logger.debug("Skipping question row: %s", e)
                errors += 1
        return success, errors

    def update(self, question_id: str, **changes) -> Optional[Question]:
        """
        Partial update: only the given fields change. The merged record is
        validated again before it replaces the stored one.

        Returns:
            The updated question, or None if the id does not exist
        """
        unknown = set(changes) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown question fields: {sorted(unknown)}")

        with self._lock:
            existing = self._questions.get(question_id)
            if existing is None:
                return None
            merged = {name: getattr(existing, name) for name in _UPDATABLE_FIELDS}
            merged.update({k: v for k, v in changes.items() if v is not None})
            updated = Question(
                question_id=existing.question_id,
                created_at=existing.created_at,
                **merged,
            )
            self._questions[question_id] = updated
            return updated

    def delete(self, question_id: str) -> bool:
        with self._lock:
            return self._questions.pop(question_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._questions)

    def categories(self) -> List[str]:
        with self._lock:
            return sorted({q.category for q in self._questions.values()})

    def category_counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(Counter(q.category for q in self._questions.values()))

    def sample(self, quotas: Dict[str, int]) -> List[Question]:
        """
        Draw a random question set by per-category quota

        Each category pool is shuffled and its first `count` questions are
        taken; a pool smaller than its quota contributes everything it has.
        The combined list is shuffled once more so category order gives
        nothing away.

        Args:
            quotas: Mapping category -> number of questions wanted

        Returns:
            Randomly ordered questions
        """
        with self._lock:
            pools: Dict[str, List[Question]] = {}
            for q in self._questions.values():
                pools.setdefault(q.category, []).append(q)

        selected: List[Question] = []
        for category, count in quotas.items():
            if count <= 0:
                continue
            pool = pools.get(category, [])
            if not pool:
                logger.warning("No questions available for category %r (requested %d)", category, count)
                continue
            if len(pool) < count:
                logger.info("Category %r has %d questions, %d requested", category, len(pool), count)
            order = self.rng.permutation(len(pool))[:count]
            selected.extend(pool[i] for i in order)

        return [selected[i] for i in self.rng.permutation(len(selected))]
