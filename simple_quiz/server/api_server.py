"""FastAPI server that exposes the quiz endpoints."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import uvicorn

from simple_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from simple_quiz.core.errors import (
    InvalidInputError,
    NotFoundError,
    QuizError,
    StateViolationError,
)
from simple_quiz.core.quiz_manager import QuizManager

_FINISHED_MESSAGE = "Quiz completed successfully!"


class LoginPayload(BaseModel):
    """Payload schema for the login flow."""

    name: str | None = None


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    question_id: str
    option_id: str


class AnsweredQuestionOut(BaseModel):
    question: str
    question_id: str
    option: str
    option_id: str


class AnswerDetailOut(BaseModel):
    question: str
    answer: str
    is_correct: bool


class ScoreDataOut(BaseModel):
    """Score report; fractions in [0, 1], relative performance may be negative."""

    score: float
    total_questions: int
    correct_answers: int
    better_than: float
    relative_performance: float
    answers_detail: list[AnswerDetailOut]


class OptionOut(BaseModel):
    id: str
    label: str


class QuestionOut(BaseModel):
    label: str
    options: list[OptionOut]


def _status_for(exc: QuizError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, StateViolationError):
        return 403
    if isinstance(exc, InvalidInputError):
        return 400
    return 500


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager, logger: logging.Logger | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    logger = logger or logging.getLogger(__name__)
    app = FastAPI(title="Simple Quiz API", version="0.1.0")
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.exception_handler(QuizError)
    async def handle_quiz_error(request: Request, exc: QuizError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code == 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
            return JSONResponse(status_code=500, content={"detail": "An internal error occurred"})
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, status_code, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("%s %s rejected (400): malformed request", request.method, request.url.path)
        return JSONResponse(status_code=400, content={"detail": "Bad Request"})

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @app.post("/users/login", status_code=201)
    def login(
        payload: LoginPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, str]:
        user = manager.login(payload.name)
        return {"user_id": user.id}

    @app.post("/users/{user_id}/answer")
    def answer_question(
        user_id: str,
        payload: AnswerPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, str]:
        manager.submit_answer(user_id, payload.question_id, payload.option_id)
        return {"status": "ok"}

    @app.get("/users/{user_id}/answered", response_model=list[AnsweredQuestionOut])
    def get_answered(
        user_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[AnsweredQuestionOut]:
        return [
            AnsweredQuestionOut(
                question=row.question,
                question_id=row.question_id,
                option=row.option,
                option_id=row.option_id,
            )
            for row in manager.list_answered(user_id)
        ]

    @app.post("/users/{user_id}/finish")
    def finish_quiz(
        user_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, str]:
        manager.finish(user_id)
        return {"message": _FINISHED_MESSAGE}

    @app.get("/users/{user_id}/score", response_model=ScoreDataOut)
    def get_score_data(
        user_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> ScoreDataOut:
        report = manager.get_score_data(user_id)
        return ScoreDataOut(
            score=report.score,
            total_questions=report.total_questions,
            correct_answers=report.correct_answers,
            better_than=report.better_than,
            relative_performance=report.relative_performance,
            answers_detail=[
                AnswerDetailOut(question=row.question, answer=row.answer, is_correct=row.is_correct)
                for row in report.answers_detail
            ],
        )

    @app.get("/questions", response_model=dict[str, QuestionOut])
    def list_questions(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return manager.list_questions()

    @app.get("/questions/{question_id}", response_model=QuestionOut)
    def get_question(
        question_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        return manager.get_question(question_id)

    return app


def run_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log_level: str = "info",
) -> None:
    """Serve the API in the foreground until uvicorn receives a shutdown signal."""
    app = create_api_app(quiz_manager, logger=logging.getLogger("simple_quiz.server"))
    config = uvicorn.Config(app=app, host=host, port=port, log_level=log_level.lower())
    server = uvicorn.Server(config)
    server.run()
