"""
Score history API endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, Response
from typing import List, Optional
from api.schemas import ScoreCreateRequest, ScoreResponse
from api.shared import (
    get_question_repository,
    get_score_calculator,
    get_score_history,
)
from services.question_repository_service import QuestionRepositoryService
from services.score_calculator_service import ScoreCalculatorService
from services.score_history_service import ScoreHistoryService

router = APIRouter(prefix="/api/scores", tags=["Scores"])


@router.get("", response_model=List[ScoreResponse], summary="List scores, newest first")
async def list_scores(
    limit: Optional[int] = None,
    history: ScoreHistoryService = Depends(get_score_history)
):
    try:
        return [ScoreResponse.from_model(s) for s in history.list(limit=limit)]
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch scores: {str(e)}")


@router.post("", response_model=ScoreResponse, status_code=201, summary="Submit an exam result")
async def create_score(
    request: ScoreCreateRequest,
    calculator: ScoreCalculatorService = Depends(get_score_calculator),
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    """
    Record one completed exam

    **Scoring:**
    - totalScore is always recomputed from correctAnswers / totalQuestions
    - with questionIds, answersGiven is re-scored against the stored
      questions (unknown and repeated ids are ignored) and the client's counts
      are discarded
    """
    try:
        if request.question_ids is not None:
            question_ids = list(dict.fromkeys(request.question_ids))
            stored = repository.get_many(question_ids)
            questions = [stored[qid] for qid in question_ids if qid in stored]
            score = calculator.score(
                questions=questions,
                answers_given=request.answers_given,
                time_spent=request.time_spent,
                exam_type=request.exam_type,
                exam_set_id=request.exam_set_id,
            )
        else:
            breakdown = None
            if request.category_breakdown is not None:
                breakdown = {c: r.to_model() for c, r in request.category_breakdown.items()}
            score = calculator.record_summary(
                total_questions=request.total_questions,
                correct_answers=request.correct_answers,
                time_spent=request.time_spent,
                exam_type=request.exam_type,
                answers_given=request.answers_given,
                category_breakdown=breakdown,
                exam_set_id=request.exam_set_id,
            )
        return ScoreResponse.from_model(score)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to save score: {str(e)}")


@router.api_route("/export", methods=["GET", "POST"], summary="Download score history as CSV")
async def export_scores(
    history: ScoreHistoryService = Depends(get_score_history)
):
    try:
        content = history.export_csv()
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to export scores: {str(e)}")

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="exam_scores.csv"'},
    )
