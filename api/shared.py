"""
Shared service instances and dependency providers for all API routes
"""

import logging
from typing import Optional

from config import Settings, get_settings as _load_settings
from services.admin_auth_service import AdminAuthService
from services.csv_import_service import CsvImportService
from services.exam_generator_service import ExamGeneratorService
from services.exam_session_service import ExamSessionService
from services.exam_set_registry_service import ExamSetRegistryService
from services.question_repository_service import QuestionRepositoryService
from services.sample_data_service import seed_sample_data
from services.score_calculator_service import ScoreCalculatorService
from services.score_history_service import ScoreHistoryService

logger = logging.getLogger(__name__)

# Cache variables
_settings_cache: Optional[Settings] = None
_question_repository_cache: Optional[QuestionRepositoryService] = None
_exam_set_registry_cache: Optional[ExamSetRegistryService] = None
_score_history_cache: Optional[ScoreHistoryService] = None
_admin_auth_cache: Optional[AdminAuthService] = None


def get_settings() -> Settings:
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = _load_settings()
    return _settings_cache


def get_question_repository() -> QuestionRepositoryService:
    global _question_repository_cache
    if _question_repository_cache is None:
        _question_repository_cache = QuestionRepositoryService()
    return _question_repository_cache


def get_exam_set_registry() -> ExamSetRegistryService:
    global _exam_set_registry_cache
    if _exam_set_registry_cache is None:
        _exam_set_registry_cache = ExamSetRegistryService()
    return _exam_set_registry_cache


def get_score_history() -> ScoreHistoryService:
    global _score_history_cache
    if _score_history_cache is None:
        _score_history_cache = ScoreHistoryService()
    return _score_history_cache


def get_admin_auth() -> AdminAuthService:
    global _admin_auth_cache
    if _admin_auth_cache is None:
        settings = get_settings()
        _admin_auth_cache = AdminAuthService(settings.admin_username, settings.admin_password)
    return _admin_auth_cache


def get_exam_generator() -> ExamGeneratorService:
    """Dependency to build an ExamGeneratorService"""
    return ExamGeneratorService(get_question_repository(), get_exam_set_registry())


def get_score_calculator() -> ScoreCalculatorService:
    """Dependency to build a ScoreCalculatorService"""
    return ScoreCalculatorService(get_score_history())


def get_exam_session_service() -> ExamSessionService:
    """Dependency to build an ExamSessionService"""
    return ExamSessionService(
        repository=get_question_repository(),
        calculator=get_score_calculator(),
        history=get_score_history(),
        duration_seconds=get_settings().exam_duration_seconds,
    )


def get_csv_importer() -> CsvImportService:
    return CsvImportService(get_question_repository())


def load_initial_data() -> None:
    """Register the standard exam set; seed sample questions when enabled"""
    get_exam_set_registry().seed_standard()

    settings = get_settings()
    if not settings.seed_sample_data:
        logger.info("Sample data seeding disabled")
        return
    seed_sample_data(get_question_repository())


def clear_cache():
    """Reset all cached services and settings (used by tests or to reload data)"""
    global _settings_cache, _question_repository_cache, _exam_set_registry_cache
    global _score_history_cache, _admin_auth_cache

    _settings_cache = None
    _question_repository_cache = None
    _exam_set_registry_cache = None
    _score_history_cache = None
    _admin_auth_cache = None
