"""
Question bank API endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, Response
from typing import List, Optional
from api.schemas import (
    CategoryInfo,
    QuestionCreateRequest,
    QuestionResponse,
    QuestionUpdateRequest,
)
from api.shared import get_question_repository
from models.category import builtin_categories
from services.question_repository_service import QuestionRepositoryService

router = APIRouter(prefix="/api", tags=["Questions"])


@router.get("/questions",
            response_model=List[QuestionResponse],
            summary="List questions with optional filters")
async def list_questions(
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    search: Optional[str] = None,
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    """
    List questions in the bank, newest first

    **Filters (all optional, combined with AND):**
    - category: exact label, "all" = no filter
    - difficulty: exact label, "all" = no filter
    - search: case-insensitive match in question text or explanation
    """
    try:
        questions = repository.list(category=category, difficulty=difficulty, search=search)
        return [QuestionResponse.from_model(q) for q in questions]
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch questions: {str(e)}")


@router.get("/questions/{question_id}",
            response_model=QuestionResponse,
            summary="Get one question")
async def get_question(
    question_id: str,
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    question = repository.get(question_id)
    if question is None:
        raise HTTPException(status_code=404, detail=f"Question not found: {question_id}")
    return QuestionResponse.from_model(question)


@router.post("/questions",
             response_model=QuestionResponse,
             status_code=201,
             summary="Create a question")
async def create_question(
    request: QuestionCreateRequest,
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    try:
        question = repository.create(
            question_text=request.question_text,
            options=request.options,
            correct_answer_index=request.correct_answer_index,
            explanation=request.explanation,
            category=request.category,
            difficulty=request.difficulty.value,
        )
        return QuestionResponse.from_model(question)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create question: {str(e)}")


@router.put("/questions/{question_id}",
            response_model=QuestionResponse,
            summary="Update a question (partial)")
async def update_question(
    question_id: str,
    request: QuestionUpdateRequest,
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    """Only the fields present in the body change"""
    try:
        question = repository.update(question_id, **request.changes())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update question: {str(e)}")

    if question is None:
        raise HTTPException(status_code=404, detail=f"Question not found: {question_id}")
    return QuestionResponse.from_model(question)


@router.delete("/questions/{question_id}",
               status_code=204,
               summary="Delete a question")
async def delete_question(
    question_id: str,
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    if not repository.delete(question_id):
        raise HTTPException(status_code=404, detail=f"Question not found: {question_id}")
    return Response(status_code=204)


@router.get("/categories",
            response_model=List[CategoryInfo],
            summary="Known categories with question counts")
async def list_categories(
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    """
    Built-in subjects first (in exam order), then any extra subjects found
    in the bank
    """
    counts = repository.category_counts()
    builtin = builtin_categories()
    extra = sorted(c for c in counts if c not in builtin)
    return [
        CategoryInfo(name=name, question_count=counts.get(name, 0), builtin=name in builtin)
        for name in builtin + extra
    ]
