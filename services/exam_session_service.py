"""
Exam Session Service

State machine for one exam attempt: NOT_STARTED -> IN_PROGRESS -> SUBMITTED.
The session lives on the client; every call takes the client's snapshot and
returns a new one, so the server keeps no per-attempt state.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Optional

from models.exam_session import ExamSession, SessionStatus
from models.question import OPTION_COUNT
from models.timestamps import utcnow
from services.exam_generator_service import GeneratedExam
from services.exceptions import SessionStateError, ValidationError
from services.question_repository_service import QuestionRepositoryService
from services.score_calculator_service import ScoreCalculatorService
from services.score_history_service import ScoreHistoryService

logger = logging.getLogger(__name__)


class ExamSessionService:
    """
    Applies client interactions (answer, bookmark, navigate, submit) to a
    session snapshot. Once the time limit has passed, the next interaction
    submits the session instead of applying the change.
    """

    def __init__(self,
                 repository: QuestionRepositoryService,
                 calculator: ScoreCalculatorService,
                 history: ScoreHistoryService,
                 duration_seconds: int):
        self.repository = repository
        self.calculator = calculator
        self.history = history
        self.duration_seconds = duration_seconds

    def create(self, exam: GeneratedExam, duration_seconds: Optional[int] = None) -> ExamSession:
        return ExamSession(
            session_id=str(uuid.uuid4()),
            questions=list(exam.questions),
            duration_seconds=duration_seconds or self.duration_seconds,
            exam_type=exam.exam_type,
            exam_set_id=exam.exam_set_id,
        )

    def begin(self, session: ExamSession, now: Optional[datetime] = None) -> ExamSession:
        if session.status != SessionStatus.NOT_STARTED:
            raise SessionStateError(f"Session already {session.status.value}")
        return replace(session, status=SessionStatus.IN_PROGRESS, started_at=now or utcnow())

    def start(self,
              exam: GeneratedExam,
              duration_seconds: Optional[int] = None,
              now: Optional[datetime] = None) -> ExamSession:
        return self.begin(self.create(exam, duration_seconds), now)

    def elapsed_seconds(self, session: ExamSession, now: Optional[datetime] = None) -> int:
        if session.started_at is None:
            return 0
        elapsed = ((now or utcnow()) - session.started_at).total_seconds()
        return max(0, int(elapsed))

    def remaining_seconds(self, session: ExamSession, now: Optional[datetime] = None) -> int:
        if session.status == SessionStatus.SUBMITTED:
            return 0
        if session.status == SessionStatus.NOT_STARTED:
            return session.duration_seconds
        return max(0, session.duration_seconds - self.elapsed_seconds(session, now))

    def is_expired(self, session: ExamSession, now: Optional[datetime] = None) -> bool:
        return (session.status == SessionStatus.IN_PROGRESS
                and self.remaining_seconds(session, now) == 0)

    def answer(self,
               session: ExamSession,
               question_id: str,
               option_index: int,
               now: Optional[datetime] = None) -> ExamSession:
        self._require_in_progress(session)
        if self.is_expired(session, now):
            return self._force_submit(session, now)

        if question_id not in session.question_ids():
            raise ValidationError(f"Question {question_id} is not part of this exam")
        if not 0 <= option_index < OPTION_COUNT:
            raise ValidationError(f"Option index must be 0-{OPTION_COUNT - 1}, got {option_index}")

        answers = dict(session.answers)
        answers[question_id] = option_index
        return replace(session, answers=answers)

    def toggle_bookmark(self,
                        session: ExamSession,
                        question_id: str,
                        now: Optional[datetime] = None) -> ExamSession:
        self._require_in_progress(session)
        if self.is_expired(session, now):
            return self._force_submit(session, now)

        if question_id not in session.question_ids():
            raise ValidationError(f"Question {question_id} is not part of this exam")

        bookmarks = list(session.bookmarked_question_ids)
        if question_id in bookmarks:
            bookmarks.remove(question_id)
        else:
            bookmarks.append(question_id)
        return replace(session, bookmarked_question_ids=bookmarks)

    def navigate(self,
                 session: ExamSession,
                 index: int,
                 now: Optional[datetime] = None) -> ExamSession:
        self._require_in_progress(session)
        if self.is_expired(session, now):
            return self._force_submit(session, now)

        if not 0 <= index < len(session.questions):
            raise ValidationError(f"Question index out of range: {index}")
        return replace(session, current_question_index=index)

    def submit(self, session: ExamSession, now: Optional[datetime] = None) -> ExamSession:
        """
        Score the session and mark it submitted

        A snapshot that is already submitted is accepted only if its score
        was recorded, in which case it comes back unchanged.

        Raises:
            SessionStateError: session not started, or submitted without a score
        """
        if session.status == SessionStatus.SUBMITTED:
            existing = self.history.get_by_session(session.session_id)
            if existing is None:
                raise SessionStateError("Session was already submitted")
            return replace(session, score_id=existing.score_id)

        self._require_in_progress(session)

        # Stored questions are authoritative; deleted ones fall back to the snapshot copy
        stored = self.repository.get_many(session.question_ids())
        questions = [stored.get(q.question_id, q) for q in session.questions]

        time_spent = min(self.elapsed_seconds(session, now), session.duration_seconds)
        score = self.calculator.score(
            questions=questions,
            answers_given=session.answers,
            time_spent=time_spent,
            exam_type=session.exam_type,
            exam_set_id=session.exam_set_id,
            session_id=session.session_id,
        )
        return replace(session, status=SessionStatus.SUBMITTED, score_id=score.score_id)

    def _force_submit(self, session: ExamSession, now: Optional[datetime]) -> ExamSession:
        logger.info("Session %s ran out of time; submitting", session.session_id)
        return self.submit(session, now)

    @staticmethod
    def _require_in_progress(session: ExamSession) -> None:
        if session.status == SessionStatus.NOT_STARTED:
            raise SessionStateError("Session has not started")
        if session.status == SessionStatus.SUBMITTED:
            raise SessionStateError("Session was already submitted")
        if session.started_at is None:
            raise SessionStateError("Session in progress has no start time")
