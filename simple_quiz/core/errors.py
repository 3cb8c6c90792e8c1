"""Exceptions raised by the quiz core and mapped to responses by the server."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for every failure raised by the quiz core."""


class NotFoundError(QuizError):
    """Raised when a user or question id is unknown."""


class StateViolationError(QuizError):
    """Raised when an operation is not allowed in the user's current state."""


class AlreadyFinishedError(StateViolationError):
    """Raised when a finished user tries to answer or finish again."""


class IncompleteAnswersError(StateViolationError):
    """Raised when a user tries to finish before answering every question."""


class NotFinishedError(StateViolationError):
    """Raised when score data is requested before the user finished."""


class InvalidInputError(QuizError):
    """Raised when a request carries values the quiz cannot accept."""


class InvalidOptionError(InvalidInputError):
    """Raised when the chosen option does not belong to the question."""


class StorageError(QuizError):
    """Raised when a collection cannot be read, decoded or written."""
