"""Application entry point for the quiz service."""

from __future__ import annotations

from simple_quiz.core.quiz_manager import QuizManager
from simple_quiz.core.services.record_store import QuestionRepository, UserRepository
from simple_quiz.server.api_server import run_api_server
from simple_quiz.utils.logging_config import configure_logging
from simple_quiz.utils.settings import load_settings


def main() -> None:
    """Load settings, initialize logging, and serve the API."""
    settings = load_settings()
    logger = configure_logging(settings.log_level)
    logger.info("Starting quiz service…")
    logger.info("Users stored in %s, questions read from %s", settings.users_path, settings.questions_path)

    quiz_manager = QuizManager(
        users=UserRepository(settings.users_path, logger=logger.getChild("users")),
        questions=QuestionRepository(settings.questions_path, logger=logger.getChild("questions")),
        logger=logger.getChild("quiz"),
    )
    logger.info("Listening on http://%s:%d/", settings.host, settings.port)
    run_api_server(quiz_manager, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
