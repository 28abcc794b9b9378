"""
Exam set API endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, Response
from typing import Dict, List
from api.schemas import (
    ExamSetCreateRequest,
    ExamSetResponse,
    ExamSetUpdateRequest,
)
from api.shared import get_exam_set_registry, get_question_repository
from models.category import known_categories
from services.exam_set_registry_service import ExamSetRegistryService
from services.question_repository_service import QuestionRepositoryService

router = APIRouter(prefix="/api/exam-sets", tags=["Exam Sets"])


def _check_categories(distribution: Dict[str, int],
                      repository: QuestionRepositoryService) -> None:
    """Reject distribution keys that match no known category"""
    known = known_categories(repository.categories())
    unknown = sorted(c for c in distribution if c not in known)
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown categories: {', '.join(unknown)}")


@router.get("", response_model=List[ExamSetResponse], summary="List exam sets")
async def list_exam_sets(
    active_only: bool = False,
    registry: ExamSetRegistryService = Depends(get_exam_set_registry)
):
    return [ExamSetResponse.from_model(s) for s in registry.list(active_only=active_only)]


@router.get("/{exam_set_id}", response_model=ExamSetResponse, summary="Get one exam set")
async def get_exam_set(
    exam_set_id: str,
    registry: ExamSetRegistryService = Depends(get_exam_set_registry)
):
    exam_set = registry.get(exam_set_id)
    if exam_set is None:
        raise HTTPException(status_code=404, detail=f"Exam set not found: {exam_set_id}")
    return ExamSetResponse.from_model(exam_set)


@router.post("", response_model=ExamSetResponse, status_code=201, summary="Create an exam set")
async def create_exam_set(
    request: ExamSetCreateRequest,
    registry: ExamSetRegistryService = Depends(get_exam_set_registry),
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    """
    Create a named distribution template

    The total may exceed the exam limit; generation scales it down
    proportionally.
    """
    _check_categories(request.category_distribution, repository)
    try:
        exam_set = registry.create(
            name=request.name,
            description=request.description,
            category_distribution=request.category_distribution,
            is_active=request.is_active,
        )
        return ExamSetResponse.from_model(exam_set)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{exam_set_id}", response_model=ExamSetResponse, summary="Update an exam set (partial)")
async def update_exam_set(
    exam_set_id: str,
    request: ExamSetUpdateRequest,
    registry: ExamSetRegistryService = Depends(get_exam_set_registry),
    repository: QuestionRepositoryService = Depends(get_question_repository)
):
    if request.category_distribution is not None:
        _check_categories(request.category_distribution, repository)
    try:
        exam_set = registry.update(exam_set_id, **request.changes())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if exam_set is None:
        raise HTTPException(status_code=404, detail=f"Exam set not found: {exam_set_id}")
    return ExamSetResponse.from_model(exam_set)


@router.delete("/{exam_set_id}", status_code=204, summary="Delete an exam set")
async def delete_exam_set(
    exam_set_id: str,
    registry: ExamSetRegistryService = Depends(get_exam_set_registry)
):
    if not registry.delete(exam_set_id):
        raise HTTPException(status_code=404, detail=f"Exam set not found: {exam_set_id}")
    return Response(status_code=204)
