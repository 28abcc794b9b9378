from __future__ import annotations

from typing import List

import numpy as np
import pytest
from fastapi.testclient import TestClient

from api import shared
from models.category import Category
from models.question import Question
from services.exam_generator_service import ExamGeneratorService
from services.exam_session_service import ExamSessionService
from services.exam_set_registry_service import ExamSetRegistryService
from services.question_repository_service import QuestionRepositoryService
from services.score_calculator_service import ScoreCalculatorService
from services.score_history_service import ScoreHistoryService


def add_questions(repository: QuestionRepositoryService,
                  category: str,
                  n: int,
                  difficulty: str = "ปานกลาง",
                  correct_answer_index: int = 0) -> List[Question]:
    return [
        repository.create(
            question_text=f"{category} question {i}",
            options=["a", "b", "c", "d"],
            correct_answer_index=correct_answer_index,
            explanation=f"explanation {i}",
            category=category,
            difficulty=difficulty,
        )
        for i in range(n)
    ]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def repository(rng):
    return QuestionRepositoryService(rng=rng)


@pytest.fixture
def full_bank(repository):
    """Enough questions in every built-in category for a full 150-question exam"""
    for category in Category:
        add_questions(repository, category.value, 40)
    return repository


@pytest.fixture
def registry():
    return ExamSetRegistryService()


@pytest.fixture
def history():
    return ScoreHistoryService()


@pytest.fixture
def calculator(history):
    return ScoreCalculatorService(history)


@pytest.fixture
def generator(repository, registry):
    return ExamGeneratorService(repository, registry)


@pytest.fixture
def sessions(repository, calculator, history):
    return ExamSessionService(repository, calculator, history, duration_seconds=3600)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", "admin")
    monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "true")
    monkeypatch.setenv("EXAM_DURATION_SECONDS", "600")
    shared.clear_cache()

    from api.main import app

    with TestClient(app) as test_client:
        yield test_client
    shared.clear_cache()
