"""Default locations of the durable record collections."""

DEFAULT_USERS_PATH: str = "db/users.json"
DEFAULT_QUESTIONS_PATH: str = "db/questions.json"
JSON_INDENT: int = 2
FILE_MODE: int = 0o644
