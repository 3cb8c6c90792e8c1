"""Runtime settings read from the environment and an optional .env file."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from simple_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from simple_quiz.constants.storage_constants import (
    DEFAULT_QUESTIONS_PATH,
    DEFAULT_USERS_PATH,
)

_ENV_PREFIX = "SIMPLE_QUIZ_"


@dataclass(frozen=True, slots=True)
class Settings:
    """Where the service listens and where its collections live."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    users_path: Path = Path(DEFAULT_USERS_PATH)
    questions_path: Path = Path(DEFAULT_QUESTIONS_PATH)
    log_level: str = "INFO"


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Build settings from ``SIMPLE_QUIZ_*`` variables.

    Without ``env_file`` the nearest .env at or above the working directory is
    used. Values already present in the process environment win over the
    ones found in the .env file.
    """
    if env_file is None:
        env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(dotenv_path=env_file, override=False)

    raw_port = _env("PORT")
    try:
        port = int(raw_port) if raw_port else DEFAULT_PORT
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}PORT must be an integer, got {raw_port!r}.") from exc

    return Settings(
        host=_env("HOST") or DEFAULT_HOST,
        port=port,
        users_path=Path(_env("USERS_PATH") or DEFAULT_USERS_PATH),
        questions_path=Path(_env("QUESTIONS_PATH") or DEFAULT_QUESTIONS_PATH),
        log_level=(_env("LOG_LEVEL") or "INFO").upper(),
    )


def _env(name: str) -> str | None:
    value = os.environ.get(f"{_ENV_PREFIX}{name}")
    if value is None:
        return None
    return value.strip() or None
