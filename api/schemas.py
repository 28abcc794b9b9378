"""
API Schemas - Request/Response models

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from models.category import Difficulty
from models.exam_session import ExamSession, SessionStatus
from models.exam_set import ExamSet
from models.question import OPTION_COUNT, Question
from models.score import CategoryResult, Score
from services.exam_generator_service import ExamRequest


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============== Questions ===============


class QuestionCreateRequest(ApiModel):
    """Body for creating a question"""
    question_text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=OPTION_COUNT, max_length=OPTION_COUNT,
                               description="Exactly four options, index 0-3")
    correct_answer_index: int = Field(..., ge=0, le=OPTION_COUNT - 1)
    explanation: str = ""
    category: str = Field(..., min_length=1)
    difficulty: Difficulty = Difficulty.MEDIUM

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "questionText": "ถ้า 2x + 5 = 17 แล้วค่าของ x คือเท่าใด?",
                "options": ["5", "6", "7", "8"],
                "correctAnswerIndex": 1,
                "explanation": "2x = 12 → x = 6",
                "category": "ความสามารถทั่วไป",
                "difficulty": "ปานกลาง",
            }
        },
    )


class QuestionUpdateRequest(ApiModel):
    """Partial update: omitted fields keep their current value"""
    question_text: Optional[str] = Field(default=None, min_length=1)
    options: Optional[List[str]] = Field(default=None, min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_answer_index: Optional[int] = Field(default=None, ge=0, le=OPTION_COUNT - 1)
    explanation: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[Difficulty] = None

    def changes(self) -> Dict:
        data = self.model_dump(exclude_unset=True, exclude_none=True)
        if "difficulty" in data:
            data["difficulty"] = Difficulty(data["difficulty"]).value
        return data


class QuestionResponse(ApiModel):
    """Question as returned to clients"""
    id: str
    question_text: str
    options: List[str]
    correct_answer_index: int
    explanation: str
    category: str
    difficulty: str
    created_at: datetime

    @classmethod
    def from_model(cls, question: Question) -> "QuestionResponse":
        return cls(
            id=question.question_id,
            question_text=question.question_text,
            options=question.options,
            correct_answer_index=question.correct_answer_index,
            explanation=question.explanation,
            category=question.category,
            difficulty=question.difficulty,
            created_at=question.created_at,
        )

    def to_model(self) -> Question:
        return Question(
            question_id=self.id,
            question_text=self.question_text,
            options=self.options,
            correct_answer_index=self.correct_answer_index,
            explanation=self.explanation,
            category=self.category,
            difficulty=self.difficulty,
            created_at=_naive_utc(self.created_at),
        )


class CategoryInfo(ApiModel):
    name: str
    question_count: int
    builtin: bool


# =============== Exam sets ===============


class ExamSetCreateRequest(ApiModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    category_distribution: Dict[str, int] = Field(
        ..., description="Number of questions per category"
    )
    is_active: bool = True

    @model_validator(mode="after")
    def check_counts(self):
        negative = [c for c, n in self.category_distribution.items() if n < 0]
        if negative:
            raise ValueError(f"Question counts must be non-negative: {negative}")
        return self


class ExamSetUpdateRequest(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category_distribution: Optional[Dict[str, int]] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def check_counts(self):
        if self.category_distribution:
            negative = [c for c, n in self.category_distribution.items() if n < 0]
            if negative:
                raise ValueError(f"Question counts must be non-negative: {negative}")
        return self

    def changes(self) -> Dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ExamSetResponse(ApiModel):
    id: str
    name: str
    description: str
    category_distribution: Dict[str, int]
    is_active: bool
    total_questions: int
    created_at: datetime

    @classmethod
    def from_model(cls, exam_set: ExamSet) -> "ExamSetResponse":
        return cls(
            id=exam_set.exam_set_id,
            name=exam_set.name,
            description=exam_set.description,
            category_distribution=exam_set.category_distribution,
            is_active=exam_set.is_active,
            total_questions=exam_set.total_questions,
            created_at=exam_set.created_at,
        )


# =============== Mock exam generation ===============


class MockExamRequest(ApiModel):
    """
    Exam generation request. One of:
    - {"type": "full"}
    - {"type": "custom", "categories": {...}}
    - {"examSetId": "..."}
    """
    type: Optional[Literal["full", "custom"]] = None
    categories: Optional[Dict[str, int]] = None
    exam_set_id: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "type": "custom",
                "categories": {"ภาษาไทย": 10, "ภาษาอังกฤษ": 10},
            }
        },
    )

    @model_validator(mode="after")
    def check_shape(self):
        if self.exam_set_id is not None:
            if self.type is not None or self.categories is not None:
                raise ValueError("examSetId cannot be combined with type or categories")
        elif self.type == "custom" and not self.categories:
            raise ValueError("categories are required for a custom exam")
        elif self.type == "full" and self.categories is not None:
            raise ValueError("categories are not allowed for a full exam")
        return self

    def to_request(self) -> ExamRequest:
        if self.exam_set_id is not None:
            return ExamRequest.from_exam_set(self.exam_set_id)
        if self.type == "custom" or self.categories is not None:
            return ExamRequest.custom(self.categories or {})
        return ExamRequest.full()


# =============== Scores ===============


class CategoryResultSchema(ApiModel):
    correct: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    def to_model(self) -> CategoryResult:
        return CategoryResult(correct=self.correct, total=self.total)


class ScoreCreateRequest(ApiModel):
    """
    Exam result sent by the client. totalScore is optional and ignored:
    the server recomputes it. When questionIds is given, the server scores
    answersGiven against the stored questions instead of trusting the counts.
    """
    total_score: Optional[int] = None
    total_questions: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    time_spent: int = Field(..., ge=0, description="Seconds")
    exam_type: str = Field(..., min_length=1)
    exam_set_id: Optional[str] = None
    answers_given: Dict[str, int] = Field(default_factory=dict)
    category_breakdown: Optional[Dict[str, CategoryResultSchema]] = None
    question_ids: Optional[List[str]] = None

    @model_validator(mode="after")
    def check_counts(self):
        if self.correct_answers > self.total_questions:
            raise ValueError("correctAnswers cannot exceed totalQuestions")
        return self


class ScoreResponse(ApiModel):
    id: str
    total_score: int
    total_questions: int
    correct_answers: int
    date_taken: datetime
    time_spent: int
    exam_type: str
    exam_set_id: Optional[str] = None
    answers_given: Dict[str, int]
    category_breakdown: Dict[str, CategoryResultSchema]
    session_id: Optional[str] = None

    @classmethod
    def from_model(cls, score: Score) -> "ScoreResponse":
        return cls(
            id=score.score_id,
            total_score=score.total_score,
            total_questions=score.total_questions,
            correct_answers=score.correct_answers,
            date_taken=score.date_taken,
            time_spent=score.time_spent,
            exam_type=score.exam_type,
            exam_set_id=score.exam_set_id,
            answers_given=score.answers_given,
            category_breakdown={
                category: CategoryResultSchema(correct=r.correct, total=r.total)
                for category, r in score.category_breakdown.items()
            },
            session_id=score.session_id,
        )


# =============== Admin ===============


class ImportResultResponse(ApiModel):
    success: int
    errors: int


class AdminLoginRequest(ApiModel):
    username: str
    password: str


class AdminLoginResponse(ApiModel):
    success: bool
    token: str
    message: str


class AdminStatsResponse(ApiModel):
    total_questions: int
    total_exams: int
    average_score: int
    average_time: int = Field(..., description="Seconds")


# =============== Exam session (client-held) ===============


class ExamSessionSnapshot(ApiModel):
    """
    Exam attempt state held by the client.
    The server does not store it; the client sends it back on every call.
    """
    session_id: str
    status: SessionStatus
    questions: List[QuestionResponse]
    answers: Dict[str, int] = Field(default_factory=dict)
    bookmarked_question_ids: List[str] = Field(default_factory=list)
    current_question_index: int = Field(default=0, ge=0)
    started_at: Optional[datetime] = None
    duration_seconds: int = Field(..., ge=1)
    exam_type: str
    exam_set_id: Optional[str] = None
    score_id: Optional[str] = None

    @classmethod
    def from_model(cls, session: ExamSession) -> "ExamSessionSnapshot":
        return cls(
            session_id=session.session_id,
            status=session.status,
            questions=[QuestionResponse.from_model(q) for q in session.questions],
            answers=session.answers,
            bookmarked_question_ids=session.bookmarked_question_ids,
            current_question_index=session.current_question_index,
            started_at=session.started_at,
            duration_seconds=session.duration_seconds,
            exam_type=session.exam_type,
            exam_set_id=session.exam_set_id,
            score_id=session.score_id,
        )

    def to_model(self) -> ExamSession:
        return ExamSession(
            session_id=self.session_id,
            questions=[q.to_model() for q in self.questions],
            duration_seconds=self.duration_seconds,
            exam_type=self.exam_type,
            status=self.status,
            answers=dict(self.answers),
            bookmarked_question_ids=list(self.bookmarked_question_ids),
            current_question_index=self.current_question_index,
            started_at=_naive_utc(self.started_at) if self.started_at else None,
            exam_set_id=self.exam_set_id,
            score_id=self.score_id,
        )


class SessionStartRequest(MockExamRequest):
    duration_seconds: Optional[int] = Field(default=None, ge=60, description="Overrides the configured time limit")


class SessionAnswerRequest(ApiModel):
    session: ExamSessionSnapshot
    question_id: str
    option_index: int


class SessionBookmarkRequest(ApiModel):
    session: ExamSessionSnapshot
    question_id: str


class SessionNavigateRequest(ApiModel):
    session: ExamSessionSnapshot
    index: int


class SessionSubmitRequest(ApiModel):
    session: ExamSessionSnapshot


class SessionResponse(ApiModel):
    session: ExamSessionSnapshot
    remaining_seconds: int
    score: Optional[ScoreResponse] = None


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
