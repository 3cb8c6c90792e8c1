import json

import pytest

from simple_quiz.core.quiz_manager import QuizManager
from simple_quiz.core.services.record_store import QuestionRepository, UserRepository


SAMPLE_CATALOG = {
    "1": {
        "label": "Question 1",
        "options": [
            {"id": "A", "label": "Option A", "is_correct": True},
            {"id": "B", "label": "Option B", "is_correct": False},
        ],
    },
    "2": {
        "label": "Question 2",
        "options": [
            {"id": "A", "label": "Option A", "is_correct": False},
            {"id": "B", "label": "Option B", "is_correct": True},
        ],
    },
}


@pytest.fixture
def questions_path(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(SAMPLE_CATALOG), encoding="utf-8")
    return path


@pytest.fixture
def users_path(tmp_path):
    return tmp_path / "users.json"


@pytest.fixture
def user_repo(users_path):
    return UserRepository(users_path)


@pytest.fixture
def question_repo(questions_path):
    return QuestionRepository(questions_path)


@pytest.fixture
def manager(user_repo, question_repo):
    return QuizManager(
        users=user_repo,
        questions=question_repo,
    )
