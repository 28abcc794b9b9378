"""
Main API application
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.admin_api import router as admin_router
from api.exam_session_api import router as exam_session_router
from api.exam_set_api import router as exam_set_router
from api.mock_exam_api import router as mock_exam_router
from api.question_api import router as question_router
from api.score_api import router as score_router
from api.shared import (
    get_exam_set_registry,
    get_question_repository,
    get_settings,
    load_initial_data,
)
from config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting server - loading initial data...")

    try:
        load_initial_data()
        logger.info(
            "Question bank ready: %d questions, %d exam sets",
            get_question_repository().count(),
            len(get_exam_set_registry().list()),
        )
    except Exception:
        logger.exception("Error loading initial data")
        raise

    yield

    logger.info("Shutting down server...")


app = FastAPI(
    title="Mock Exam API",
    description="API for timed multiple-choice mock exams: question bank, exam generation and scoring",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(question_router)
app.include_router(exam_set_router)
app.include_router(mock_exam_router)
app.include_router(exam_session_router)
app.include_router(score_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Mock Exam API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
