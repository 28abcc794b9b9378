"""
Services module - Business logic
"""

from .question_repository_service import QuestionRepositoryService
from .exam_set_registry_service import ExamSetRegistryService
from .exam_generator_service import ExamGeneratorService, ExamRequest, GeneratedExam
from .score_history_service import ScoreHistoryService
from .score_calculator_service import ScoreCalculatorService
from .exam_session_service import ExamSessionService
from .csv_import_service import CsvImportService, ImportResult
from .admin_auth_service import AdminAuthService

__all__ = [
    'QuestionRepositoryService',
    'ExamSetRegistryService',
    'ExamGeneratorService',
    'ExamRequest',
    'GeneratedExam',
    'ScoreHistoryService',
    'ScoreCalculatorService',
    'ExamSessionService',
    'CsvImportService',
    'ImportResult',
    'AdminAuthService'
]
