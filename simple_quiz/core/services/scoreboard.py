"""Service for comparing a finisher's score against the other finishers."""

from __future__ import annotations

from simple_quiz.core.errors import NotFinishedError, NotFoundError
from simple_quiz.core.models import AnswerDetail, ScoreReport, User
from simple_quiz.core.services.question_catalog import QuestionCatalog
from simple_quiz.core.services.record_store import UserRepository


class Scoreboard:
    """Builds score reports from the stored users and the current catalog."""

    def __init__(self, users: UserRepository, catalog: QuestionCatalog) -> None:
        self._users = users
        self._catalog = catalog

    def get_score_data(self, user_id: str) -> ScoreReport:
        users = self._users.get_all_users()
        user = users.get(user_id)
        if user is None:
            raise NotFoundError(f"user with id {user_id} not found")
        if not user.finished_quiz:
            raise NotFinishedError(f"user {user_id} has not finished the quiz")

        others = [other for other_id, other in users.items() if other_id != user_id and other.finished_quiz]
        questions = self._catalog.list_questions()
        total_questions = len(questions)

        return ScoreReport(
            score=user.score,
            total_questions=total_questions,
            correct_answers=round(user.score * total_questions),
            better_than=better_than(user, others),
            relative_performance=relative_performance(user.score, average_score(others)),
            answers_detail=[
                AnswerDetail(
                    question=QuestionCatalog.label_for(questions, answer.question_id),
                    answer=answer.option.label,
                    is_correct=answer.option.is_correct,
                )
                for answer in user.answers
            ],
        )


def better_than(user: User, others: list[User]) -> float:
    """Share of ``others`` whose score is strictly below the user's."""
    if not others:
        return 0.0
    lower = sum(1 for other in others if other.score < user.score)
    return lower / len(others)


def average_score(users: list[User]) -> float:
    if not users:
        return 0.0
    return sum(user.score for user in users) / len(users)


def relative_performance(score: float, average: float) -> float:
    """Deviation of ``score`` from ``average`` as a fraction of the average.

    A zero average has nothing to compare against and yields 0.
    """
    if average == 0:
        return 0.0
    return (score - average) / average
