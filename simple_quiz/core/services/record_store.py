"""Durable user and question collections backed by whole-file JSON snapshots."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
import tempfile
from typing import Any

from simple_quiz.constants.storage_constants import FILE_MODE, JSON_INDENT
from simple_quiz.core.errors import NotFoundError, StorageError
from simple_quiz.core.models import Question, User
from simple_quiz.core.rwlock import ReadWriteLock


class JsonCollection:
    """A JSON object file mapping string ids to records, guarded by one lock.

    Every operation reloads the file; nothing is cached between calls.
    """

    def __init__(
        self,
        data_path: str | Path,
        *,
        missing_ok: bool,
        logger: logging.Logger | None = None,
    ) -> None:
        self._data_path = Path(data_path)
        self._missing_ok = missing_ok
        self._lock = ReadWriteLock()
        self._logger = logger or logging.getLogger(__name__)

    @property
    def data_path(self) -> Path:
        return self._data_path

    def _read_raw(self) -> dict[str, Any]:
        try:
            content = self._data_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            if self._missing_ok:
                return {}
            raise StorageError(f"reading {self._data_path}: file does not exist") from exc
        except OSError as exc:
            raise StorageError(f"reading {self._data_path}: {exc}") from exc

        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StorageError(f"decoding {self._data_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"decoding {self._data_path}: expected a JSON object")
        return data

    def _write_raw(self, data: dict[str, Any]) -> None:
        directory = self._data_path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self._data_path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=JSON_INDENT)
                    handle.write("\n")
                os.chmod(tmp_name, FILE_MODE)
                os.replace(tmp_name, self._data_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"writing {self._data_path}: {exc}") from exc


class UserRepository(JsonCollection):
    """Stores users keyed by the id assigned at creation."""

    def __init__(self, data_path: str | Path, logger: logging.Logger | None = None) -> None:
        super().__init__(data_path, missing_ok=True, logger=logger)

    def create_user(self, name: str) -> User:
        """Assign the next sequential id and persist a zero-state user."""
        with self._lock.write_locked():
            try:
                users = self._load_users()
                user_id = str(len(users) + 1)
                user = User(id=user_id, name=name)
                users[user_id] = user
                self._store_users(users)
            except StorageError as exc:
                self._logger.error("error: creating user: %s", exc)
                raise
        return user

    def update_user(self, user: User) -> None:
        with self._lock.write_locked():
            try:
                users = self._load_users()
                users[user.id] = user
                self._store_users(users)
            except StorageError as exc:
                self._logger.error("error: updating user %s: %s", user.id, exc)
                raise

    def get_user(self, user_id: str) -> User:
        with self._lock.read_locked():
            try:
                users = self._load_users()
            except StorageError as exc:
                self._logger.error("error: getting user %s: %s", user_id, exc)
                raise
        user = users.get(user_id)
        if user is None:
            raise NotFoundError(f"user with id {user_id} not found")
        return user

    def get_all_users(self) -> dict[str, User]:
        with self._lock.read_locked():
            try:
                return self._load_users()
            except StorageError as exc:
                self._logger.error("error: getting all users: %s", exc)
                raise

    def _load_users(self) -> dict[str, User]:
        raw = self._read_raw()
        try:
            return {str(key): User.from_dict(value) for key, value in raw.items()}
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise StorageError(f"decoding {self.data_path}: malformed user record ({exc!r})") from exc

    def _store_users(self, users: dict[str, User]) -> None:
        self._write_raw({user_id: user.to_dict() for user_id, user in users.items()})


class QuestionRepository(JsonCollection):
    """Read access to the question catalog.

    The catalog is deployment-time data; ``seed_questions`` exists for the
    importer only.
    """

    def __init__(self, data_path: str | Path, logger: logging.Logger | None = None) -> None:
        super().__init__(data_path, missing_ok=False, logger=logger)

    def get_all_questions(self) -> dict[str, Question]:
        with self._lock.read_locked():
            try:
                return self._load_questions()
            except StorageError as exc:
                self._logger.error("error: getting questions: %s", exc)
                raise

    def get_question(self, question_id: str) -> Question:
        with self._lock.read_locked():
            try:
                questions = self._load_questions()
            except StorageError as exc:
                self._logger.error("error: getting question %s: %s", question_id, exc)
                raise
        question = questions.get(question_id)
        if question is None:
            raise NotFoundError(f"question with id {question_id} not found")
        return question

    def seed_questions(self, questions: dict[str, Question]) -> None:
        with self._lock.write_locked():
            try:
                self._write_raw({question_id: question.to_dict() for question_id, question in questions.items()})
            except StorageError as exc:
                self._logger.error("error: seeding questions: %s", exc)
                raise

    def _load_questions(self) -> dict[str, Question]:
        raw = self._read_raw()
        try:
            return {str(key): Question.from_dict(value) for key, value in raw.items()}
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise StorageError(f"decoding {self.data_path}: malformed question record ({exc!r})") from exc
