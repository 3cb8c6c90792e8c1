"""
Tests for score reports

Tests cover:
- Reference two-user scenario
- Zero-comparison guards
- Ranking helpers
"""

import pytest

from simple_quiz.core.errors import NotFinishedError, NotFoundError
from simple_quiz.core.models import User
from simple_quiz.core.services.scoreboard import average_score, better_than, relative_performance


def _finish(manager, name, choices):
    user = manager.login(name)
    for question_id, option_id in choices.items():
        manager.submit_answer(user.id, question_id, option_id)
    manager.finish(user.id)
    return user.id


class TestScoreData:
    """Test the score report of a finisher."""

    def test_two_finishers_scenario(self, manager):
        first = _finish(manager, "Ada", {"1": "A", "2": "B"})
        second = _finish(manager, "Grace", {"1": "A", "2": "A"})

        report = manager.get_score_data(first)
        assert report.score == pytest.approx(1.0)
        assert report.total_questions == 2
        assert report.correct_answers == 2
        assert report.better_than == pytest.approx(1.0)
        assert report.relative_performance == pytest.approx(1.0)

        other = manager.get_score_data(second)
        assert other.score == pytest.approx(0.5)
        assert other.correct_answers == 1
        assert other.better_than == pytest.approx(0.0)
        assert other.relative_performance == pytest.approx(-0.5)

    def test_lone_finisher_gets_zero_comparisons(self, manager):
        user_id = _finish(manager, "Ada", {"1": "A", "2": "B"})
        manager.login("Still answering")

        report = manager.get_score_data(user_id)
        assert report.better_than == 0.0
        assert report.relative_performance == 0.0

    def test_unfinished_users_are_not_compared(self, manager):
        user_id = _finish(manager, "Ada", {"1": "B", "2": "B"})
        manager.login("Grace")

        report = manager.get_score_data(user_id)
        assert report.better_than == 0.0

    def test_zero_average_guard(self, manager):
        user_id = _finish(manager, "Ada", {"1": "A", "2": "B"})
        _finish(manager, "Grace", {"1": "B", "2": "A"})

        report = manager.get_score_data(user_id)
        assert report.better_than == pytest.approx(1.0)
        assert report.relative_performance == 0.0

    def test_answers_detail(self, manager):
        user_id = _finish(manager, "Ada", {"2": "A", "1": "A"})

        details = manager.get_score_data(user_id).answers_detail
        assert [(d.question, d.answer, d.is_correct) for d in details] == [
            ("Question 2", "Option A", False),
            ("Question 1", "Option A", True),
        ]

    def test_correct_answers_matches_score(self, manager):
        user_id = _finish(manager, "Ada", {"1": "A", "2": "A"})
        report = manager.get_score_data(user_id)
        assert report.correct_answers == round(report.score * report.total_questions)

    def test_not_finished(self, manager):
        user = manager.login("Ada")
        with pytest.raises(NotFinishedError):
            manager.get_score_data(user.id)

    def test_unknown_user(self, manager):
        with pytest.raises(NotFoundError):
            manager.get_score_data("404")


class TestRankingHelpers:
    """Test the ranking arithmetic on its own."""

    def test_better_than_is_strict(self):
        user = User(id="1", name="a", score=0.5, finished_quiz=True)
        others = [
            User(id="2", name="b", score=0.5, finished_quiz=True),
            User(id="3", name="c", score=0.25, finished_quiz=True),
        ]
        assert better_than(user, others) == pytest.approx(0.5)
        assert better_than(user, []) == 0.0

    def test_relative_performance_against_mixed_scores(self):
        others = [
            User(id="2", name="b", score=0.5, finished_quiz=True),
            User(id="3", name="c", score=0.9, finished_quiz=True),
        ]
        assert average_score(others) == pytest.approx(0.7)
        assert relative_performance(0.75, 0.7) == pytest.approx(0.0714285, rel=1e-4)
        assert average_score([]) == 0.0
