"""Per-user answering and finishing rules."""

from __future__ import annotations

import logging

from simple_quiz.core.errors import (
    AlreadyFinishedError,
    IncompleteAnswersError,
    InvalidOptionError,
)
from simple_quiz.core.models import Answer, AnsweredQuestion, Option, User
from simple_quiz.core.services.question_catalog import QuestionCatalog
from simple_quiz.core.services.record_store import UserRepository


class AnswerSheet:
    """Records answers for a user and closes the quiz once every question is answered.

    A user is in progress until ``finish`` succeeds; after that the user is
    read-only and every further submission or finish is rejected.
    """

    def __init__(
        self,
        users: UserRepository,
        catalog: QuestionCatalog,
        logger: logging.Logger | None = None,
    ) -> None:
        self._users = users
        self._catalog = catalog
        self._logger = logger or logging.getLogger(__name__)

    def submit_answer(self, user_id: str, question_id: str, option_id: str) -> User:
        """Store ``option_id`` as the user's answer to ``question_id``.

        Any earlier answer to the same question is dropped and the new one is
        appended, so a re-answered question moves to the end of the list.
        """
        user = self._users.get_user(user_id)
        if user.finished_quiz:
            self._logger.info("Rejected answer from user %s: quiz already finished", user_id)
            raise AlreadyFinishedError(f"user {user_id} has already finished the quiz")

        question = self._catalog.get_question(question_id)
        option = question.find_option(option_id)
        if option is None:
            raise InvalidOptionError(f"option {option_id} is not valid for question {question_id}")

        answers = [answer for answer in user.answers if answer.question_id != question_id]
        answers.append(
            Answer(
                question_id=question_id,
                option=Option(id=option.id, label=option.label, is_correct=option.is_correct),
            )
        )
        user.answers = answers
        self._users.update_user(user)
        return user

    def finish(self, user_id: str) -> User:
        user = self._users.get_user(user_id)
        if user.finished_quiz:
            raise AlreadyFinishedError(f"user {user_id} has already finished the quiz")

        total_questions = self._catalog.total_questions()
        answered = len(user.answered_question_ids())
        if answered != total_questions:
            raise IncompleteAnswersError(
                f"missing questions to answer before finishing ({answered} of {total_questions} answered)"
            )

        user.score = compute_score(user.answers, total_questions)
        user.finished_quiz = True
        self._users.update_user(user)
        self._logger.info("User %s finished the quiz with score %.2f", user_id, user.score)
        return user

    def list_answered(self, user_id: str) -> list[AnsweredQuestion]:
        """List a user's answers in catalog order, joined with current question labels."""
        user = self._users.get_user(user_id)
        questions = self._catalog.list_questions()

        by_question = {answer.question_id: answer for answer in user.answers}
        ordered = [by_question[question_id] for question_id in questions if question_id in by_question]
        ordered.extend(answer for answer in user.answers if answer.question_id not in questions)

        return [
            AnsweredQuestion(
                question=QuestionCatalog.label_for(questions, answer.question_id),
                question_id=answer.question_id,
                option=answer.option.label,
                option_id=answer.option.id,
            )
            for answer in ordered
        ]


def compute_score(answers: list[Answer], total_questions: int) -> float:
    """Fraction of the catalog answered correctly, judged by the stored option copies."""
    if total_questions <= 0:
        return 0.0
    correct = sum(1 for answer in answers if answer.option.is_correct)
    return correct / total_questions
