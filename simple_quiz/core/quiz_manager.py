"""Business logic entry point shared by the HTTP layer and tooling."""

from __future__ import annotations

import logging
from typing import Any

from simple_quiz.core.models import AnsweredQuestion, ScoreReport, User
from simple_quiz.core.services.answer_sheet import AnswerSheet
from simple_quiz.core.services.question_catalog import QuestionCatalog
from simple_quiz.core.services.record_store import QuestionRepository, UserRepository
from simple_quiz.core.services.scoreboard import Scoreboard


class QuizManager:
    """Facade for quiz services: Record Store, Catalog, AnswerSheet and Scoreboard.

    Holds no quiz state of its own; every call goes through the repositories,
    whose locks make each store operation atomic.
    """

    def __init__(
        self,
        users: UserRepository,
        questions: QuestionRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)

        # Services
        self._users = users
        self._catalog = QuestionCatalog(questions)
        self._answer_sheet = AnswerSheet(users, self._catalog, logger=self._logger.getChild("answers"))
        self._scoreboard = Scoreboard(users, self._catalog)

    # --- Users ---

    def login(self, name: str | None) -> User:
        """Create a user under the name exactly as it was sent."""
        user = self._users.create_user(name or "")
        self._logger.info("Logged in user %s as %r", user.id, user.name)
        return user

    # --- AnswerSheet Delegation ---

    def submit_answer(self, user_id: str, question_id: str, option_id: str) -> None:
        self._answer_sheet.submit_answer(user_id, question_id, option_id)

    def finish(self, user_id: str) -> User:
        return self._answer_sheet.finish(user_id)

    def list_answered(self, user_id: str) -> list[AnsweredQuestion]:
        return self._answer_sheet.list_answered(user_id)

    # --- Scoreboard Delegation ---

    def get_score_data(self, user_id: str) -> ScoreReport:
        return self._scoreboard.get_score_data(user_id)

    # --- Catalog Delegation ---

    def list_questions(self) -> dict[str, dict[str, Any]]:
        return self._catalog.public_questions()

    def get_question(self, question_id: str) -> dict[str, Any]:
        return QuestionCatalog.to_public(self._catalog.get_question(question_id))
