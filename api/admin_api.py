"""
Admin API endpoints (login, dashboard statistics, CSV question import)
"""

from fastapi import APIRouter, HTTPException, Depends, File, UploadFile
from api.schemas import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminStatsResponse,
    ImportResultResponse,
)
from api.shared import (
    get_admin_auth,
    get_csv_importer,
    get_question_repository,
    get_score_history,
)
from services.admin_auth_service import AdminAuthService
from services.csv_import_service import CsvImportService
from services.question_repository_service import QuestionRepositoryService
from services.score_history_service import ScoreHistoryService

router = APIRouter(prefix="/api", tags=["Admin"])


@router.post("/admin/login", response_model=AdminLoginResponse, summary="Admin login")
async def admin_login(
    request: AdminLoginRequest,
    auth: AdminAuthService = Depends(get_admin_auth)
):
    token = auth.login(request.username, request.password)
    if token is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return AdminLoginResponse(success=True, token=token, message="Login successful")


@router.get("/admin/stats", response_model=AdminStatsResponse, summary="Dashboard statistics")
async def admin_stats(
    repository: QuestionRepositoryService = Depends(get_question_repository),
    history: ScoreHistoryService = Depends(get_score_history)
):
    """
    **Statistics:**
    - totalQuestions: questions in the bank
    - totalExams: recorded scores
    - averageScore: mean percentage across scores
    - averageTime: mean time spent, in seconds
    """
    try:
        stats = history.stats(total_questions=repository.count())
        return AdminStatsResponse(
            total_questions=stats["totalQuestions"],
            total_exams=stats["totalExams"],
            average_score=stats["averageScore"],
            average_time=stats["averageTime"],
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch statistics: {str(e)}")


@router.post("/import-csv", response_model=ImportResultResponse, summary="Import questions from CSV")
async def import_csv(
    csvFile: UploadFile = File(...),
    importer: CsvImportService = Depends(get_csv_importer)
):
    """
    Import questions from an uploaded CSV file

    **Expected header:** subject, question, option_a, option_b, option_c,
    option_d, correct_answer (a-d), explanation

    Rows that cannot be parsed are skipped and counted in `errors`.
    """
    try:
        content = await csvFile.read()
    finally:
        await csvFile.close()

    try:
        result = importer.import_questions(content)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to import CSV: {str(e)}")

    return ImportResultResponse(success=result.success, errors=result.errors)
