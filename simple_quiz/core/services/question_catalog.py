"""Read-only view over the question collection."""

from __future__ import annotations

from typing import Any

from simple_quiz.core.models import Question
from simple_quiz.core.services.record_store import QuestionRepository


class QuestionCatalog:
    """Supplies questions, option sets and labels to the other services."""

    def __init__(self, repository: QuestionRepository) -> None:
        self._repository = repository

    def list_questions(self) -> dict[str, Question]:
        return self._repository.get_all_questions()

    def get_question(self, question_id: str) -> Question:
        return self._repository.get_question(question_id)

    def total_questions(self) -> int:
        return len(self._repository.get_all_questions())

    @staticmethod
    def label_for(questions: dict[str, Question], question_id: str) -> str:
        """Current label of a question, or an empty string once it left the catalog."""
        question = questions.get(question_id)
        return question.label if question is not None else ""

    @staticmethod
    def to_public(question: Question) -> dict[str, Any]:
        """Client-facing shape of a question; correctness flags are left out."""
        return {
            "label": question.label,
            "options": [{"id": option.id, "label": option.label} for option in question.options],
        }

    def public_questions(self) -> dict[str, dict[str, Any]]:
        return {question_id: self.to_public(question) for question_id, question in self.list_questions().items()}
