"""
Exam Session API endpoints
API for a timed exam attempt (start, answer, bookmark, navigate, submit).
The client keeps the session snapshot and sends it with every call.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import Callable
from api.schemas import (
    ExamSessionSnapshot,
    ScoreResponse,
    SessionAnswerRequest,
    SessionBookmarkRequest,
    SessionNavigateRequest,
    SessionResponse,
    SessionStartRequest,
    SessionSubmitRequest,
)
from api.shared import (
    get_exam_generator,
    get_exam_session_service,
    get_score_history,
)
from models.exam_session import ExamSession
from services.exam_generator_service import ExamGeneratorService
from services.exam_session_service import ExamSessionService
from services.exceptions import NotFoundError, SessionStateError
from services.score_history_service import ScoreHistoryService

router = APIRouter(prefix="/api/exam-session", tags=["Exam Session"])


def _build_response(session: ExamSession,
                    sessions: ExamSessionService,
                    history: ScoreHistoryService) -> SessionResponse:
    score = history.get(session.score_id) if session.score_id else None
    return SessionResponse(
        session=ExamSessionSnapshot.from_model(session),
        remaining_seconds=sessions.remaining_seconds(session),
        score=ScoreResponse.from_model(score) if score else None,
    )


def _apply(action: Callable[[], ExamSession],
           sessions: ExamSessionService,
           history: ScoreHistoryService) -> SessionResponse:
    """Run a session transition and map service errors to HTTP errors"""
    try:
        session = action()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Exam session error: {str(e)}")
    return _build_response(session, sessions, history)


@router.post("/start",
             response_model=SessionResponse,
             summary="Generate an exam and start the timer")
async def start_session(
    request: SessionStartRequest,
    generator: ExamGeneratorService = Depends(get_exam_generator),
    sessions: ExamSessionService = Depends(get_exam_session_service),
    history: ScoreHistoryService = Depends(get_score_history)
):
    """
    Takes the same request shapes as /api/mock-exam and returns an
    in-progress session snapshot for the client to keep
    """
    return _apply(
        lambda: sessions.start(generator.prepare(request.to_request()), request.duration_seconds),
        sessions,
        history,
    )


@router.post("/answer", response_model=SessionResponse, summary="Record an answer")
async def answer_question(
    request: SessionAnswerRequest,
    sessions: ExamSessionService = Depends(get_exam_session_service),
    history: ScoreHistoryService = Depends(get_score_history)
):
    """
    Record the chosen option for one question

    If the time limit has passed, the session is submitted instead and the
    response carries the score.
    """
    return _apply(
        lambda: sessions.answer(request.session.to_model(), request.question_id, request.option_index),
        sessions,
        history,
    )


@router.post("/bookmark", response_model=SessionResponse, summary="Toggle a bookmark")
async def toggle_bookmark(
    request: SessionBookmarkRequest,
    sessions: ExamSessionService = Depends(get_exam_session_service),
    history: ScoreHistoryService = Depends(get_score_history)
):
    return _apply(
        lambda: sessions.toggle_bookmark(request.session.to_model(), request.question_id),
        sessions,
        history,
    )


@router.post("/navigate", response_model=SessionResponse, summary="Move to a question")
async def navigate(
    request: SessionNavigateRequest,
    sessions: ExamSessionService = Depends(get_exam_session_service),
    history: ScoreHistoryService = Depends(get_score_history)
):
    return _apply(
        lambda: sessions.navigate(request.session.to_model(), request.index),
        sessions,
        history,
    )


@router.post("/submit", response_model=SessionResponse, summary="Submit the exam")
async def submit_session(
    request: SessionSubmitRequest,
    sessions: ExamSessionService = Depends(get_exam_session_service),
    history: ScoreHistoryService = Depends(get_score_history)
):
    """
    Score the session and record the result

    Re-sending a submitted snapshot returns the recorded score; it never
    creates a second one.
    """
    return _apply(
        lambda: sessions.submit(request.session.to_model()),
        sessions,
        history,
    )
