"""
Mock exam generation API endpoints
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List
from api.schemas import MockExamRequest, QuestionResponse
from api.shared import get_exam_generator
from services.exam_generator_service import ExamGeneratorService
from services.exceptions import NotFoundError, ValidationError

router = APIRouter(prefix="/api", tags=["Mock Exam"])


@router.post("/mock-exam",
             response_model=List[QuestionResponse],
             summary="Generate a randomized mock exam")
async def generate_mock_exam(
    request: MockExamRequest,
    generator: ExamGeneratorService = Depends(get_exam_generator)
):
    """
    Generate an exam question set (at most 150 questions, random order)

    **Request shapes:**
    - `{"type": "full"}`: the standard six-category, 150-question exam
    - `{"type": "custom", "categories": {...}}`: per-category counts; a total
      above 150 is rejected
    - `{"examSetId": "..."}`: a registered exam set; a total above 150 is
      scaled down proportionally to exactly 150

    Categories with fewer questions than requested contribute what they have.
    """
    try:
        questions = generator.generate(request.to_request())
        return [QuestionResponse.from_model(q) for q in questions]
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to generate mock exam: {str(e)}")
