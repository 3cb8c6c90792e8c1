"""Domain models for the quiz service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Option:
    """One selectable option of a question."""

    id: str
    label: str
    is_correct: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "is_correct": self.is_correct}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Option:
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            is_correct=bool(data.get("is_correct", False)),
        )


@dataclass(slots=True)
class Question:
    """Multiple-choice question; any option flagged correct counts as correct."""

    label: str
    options: list[Option] = field(default_factory=list)

    def find_option(self, option_id: str) -> Option | None:
        return next((option for option in self.options if option.id == option_id), None)

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "options": [option.to_dict() for option in self.options]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Question:
        return cls(
            label=str(data.get("label", "")),
            options=[Option.from_dict(item) for item in data.get("options") or []],
        )


@dataclass(slots=True)
class Answer:
    """A user's chosen option, copied from the catalog when it was submitted."""

    question_id: str
    option: Option

    def to_dict(self) -> dict[str, Any]:
        return {"question_id": self.question_id, "option": self.option.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Answer:
        return cls(question_id=str(data["question_id"]), option=Option.from_dict(data["option"]))


@dataclass(slots=True)
class User:
    """Quiz participant; ``finished_quiz`` only ever goes from False to True."""

    id: str
    name: str
    score: float = 0.0
    answers: list[Answer] = field(default_factory=list)
    finished_quiz: bool = False

    def answered_question_ids(self) -> set[str]:
        return {answer.question_id for answer in self.answers}

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "answers": [answer.to_dict() for answer in self.answers],
            "finished_quiz": self.finished_quiz,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            score=float(data.get("score", 0.0)),
            answers=[Answer.from_dict(item) for item in data.get("answers") or []],
            finished_quiz=bool(data.get("finished_quiz", False)),
        )


@dataclass(slots=True)
class AnsweredQuestion:
    """Row of the answered-questions listing."""

    question: str
    question_id: str
    option: str
    option_id: str


@dataclass(slots=True)
class AnswerDetail:
    """Row of the score report describing one stored answer."""

    question: str
    answer: str
    is_correct: bool


@dataclass(slots=True)
class ScoreReport:
    """Snapshot of a finisher's result compared against other finishers."""

    score: float
    total_questions: int
    correct_answers: int
    better_than: float
    relative_performance: float
    answers_detail: list[AnswerDetail] = field(default_factory=list)
