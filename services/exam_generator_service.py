"""
Exam Generator Service
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config import MAX_EXAM_QUESTIONS
from models.category import DEFAULT_DISTRIBUTION, known_categories
from models.question import Question
from services.exam_set_registry_service import ExamSetRegistryService
from services.exceptions import NotFoundError, ValidationError
from services.question_repository_service import QuestionRepositoryService

logger = logging.getLogger(__name__)

FULL_EXAM_TYPE = "สอบเต็มรูปแบบ"
CUSTOM_EXAM_TYPE = "สอบแบบกำหนดเอง"


@dataclass
class ExamRequest:
    """
    What the client asked for. Exactly one shape applies:
    - exam_set_id: use a registered exam set (oversized sets are scaled down)
    - categories: custom per-category counts (oversized requests are rejected)
    - neither: the full default exam
    """
    exam_set_id: Optional[str] = None
    categories: Optional[Dict[str, int]] = None

    @classmethod
    def full(cls) -> "ExamRequest":
        return cls()

    @classmethod
    def custom(cls, categories: Dict[str, int]) -> "ExamRequest":
        return cls(categories=dict(categories))

    @classmethod
    def from_exam_set(cls, exam_set_id: str) -> "ExamRequest":
        return cls(exam_set_id=exam_set_id)


@dataclass
class GeneratedExam:
    questions: List[Question]
    distribution: Dict[str, int]
    exam_type: str
    exam_set_id: Optional[str] = None
    requested_total: int = 0
    shortfall: Dict[str, int] = field(default_factory=dict)


class ExamGeneratorService:
    """
    Resolves an exam request to a category distribution and samples a
    randomized, non-repeating question set from the repository
    """

    def __init__(self,
                 repository: QuestionRepositoryService,
                 registry: ExamSetRegistryService,
                 max_questions: int = MAX_EXAM_QUESTIONS):
        self.repository = repository
        self.registry = registry
        self.max_questions = max_questions

    def generate(self, request: ExamRequest) -> List[Question]:
        return self.prepare(request).questions

    def prepare(self, request: ExamRequest) -> GeneratedExam:
        """
        Build the question set for one exam

        Args:
            request: Exam set id, custom distribution, or neither for the full exam

        Returns:
            GeneratedExam with the shuffled questions, the resolved distribution
            and the exam type label

        Raises:
            NotFoundError: exam_set_id does not exist
            ValidationError: custom distribution is invalid or exceeds the cap
        """
        if request.exam_set_id is not None and request.categories is not None:
            raise ValidationError("Specify either an exam set or custom categories, not both")

        if request.exam_set_id is not None:
            exam_set = self.registry.get(request.exam_set_id)
            if exam_set is None:
                raise NotFoundError(f"Exam set not found: {request.exam_set_id}")
            distribution = scale_distribution(exam_set.category_distribution, self.max_questions)
            exam_type = exam_set.name
        elif request.categories is not None:
            distribution = self.validate_custom_distribution(request.categories)
            exam_type = CUSTOM_EXAM_TYPE
        else:
            distribution = dict(DEFAULT_DISTRIBUTION)
            exam_type = FULL_EXAM_TYPE

        questions = self.repository.sample(distribution)

        drawn: Dict[str, int] = {}
        for q in questions:
            drawn[q.category] = drawn.get(q.category, 0) + 1
        shortfall = {
            category: count - drawn.get(category, 0)
            for category, count in distribution.items()
            if count > drawn.get(category, 0)
        }

        return GeneratedExam(
            questions=questions,
            distribution=distribution,
            exam_type=exam_type,
            exam_set_id=request.exam_set_id,
            requested_total=sum(distribution.values()),
            shortfall=shortfall,
        )

    def validate_custom_distribution(self, categories: Dict[str, int]) -> Dict[str, int]:
        """
        Check a caller-supplied distribution: known category labels,
        non-negative counts, and a total between 1 and the cap.
        """
        known = known_categories(self.repository.categories())
        unknown = sorted(c for c in categories if c not in known)
        if unknown:
            raise ValidationError(f"Unknown categories: {', '.join(unknown)}")

        negative = sorted(c for c, n in categories.items() if n < 0)
        if negative:
            raise ValidationError(f"Question counts must be non-negative: {', '.join(negative)}")

        total = sum(categories.values())
        if total > self.max_questions:
            raise ValidationError(
                f"Custom exam requests {total} questions; the maximum is {self.max_questions}"
            )
        if total == 0:
            raise ValidationError("Custom exam must request at least one question")

        return dict(categories)


def scale_distribution(distribution: Dict[str, int],
                       cap: int = MAX_EXAM_QUESTIONS) -> Dict[str, int]:
    """
    Scale a distribution proportionally so it sums to exactly `cap`.

    Each count becomes floor(count * cap / total); the leftover questions are
    handed out one at a time, in category order, to the categories that
    originally asked for at least one. Distributions within the cap are
    returned unchanged.
    """
    total = sum(distribution.values())
    if total <= cap:
        return dict(distribution)

    scaled = {category: (count * cap) // total for category, count in distribution.items()}
    remainder = cap - sum(scaled.values())
    eligible = [category for category, count in distribution.items() if count > 0]

    i = 0
    while remainder > 0:
        scaled[eligible[i % len(eligible)]] += 1
        remainder -= 1
        i += 1

    logger.info("Scaled exam distribution from %d to %d questions", total, cap)
    return scaled
