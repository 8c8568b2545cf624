"""Tests for practice insights."""

from cfcoach.analysis.insights import (
    current_streak,
    difficulty_statistics,
    favorite_topic,
    practice_insights,
    week_submissions,
)
from conftest import NOW, make_submission


class TestPracticeInsights:
    def test_streak_counts_consecutive_days(self):
        subs = [make_submission(days_ago=d) for d in (0, 1, 2, 4)]
        assert current_streak(subs, now=NOW) == 3

    def test_streak_zero_without_submission_today(self):
        subs = [make_submission(days_ago=1)]
        assert current_streak(subs, now=NOW) == 0

    def test_streak_capped(self):
        subs = [make_submission(days_ago=d) for d in range(45)]
        assert current_streak(subs, now=NOW) == 30

    def test_week_submissions(self, sample_submissions):
        assert week_submissions(sample_submissions, now=NOW) == 5

    def test_favorite_topic(self, sample_submissions):
        assert favorite_topic(sample_submissions) == "dp"
        assert favorite_topic([]) is None

    def test_difficulty_statistics(self, sample_submissions):
        # Knapsack 1500 Easy, Two Sum 1000 Beginner, Watermelon 800 Beginner,
        # Old Problem unrated
        assert difficulty_statistics(sample_submissions) == [
            ("Unrated", 1), ("Beginner", 2), ("Easy", 1),
        ]

    def test_practice_insights_payload(self, sample_submissions):
        data = practice_insights(sample_submissions, now=NOW)
        assert data["most_used_language"] == "GNU C++17"
        assert data["current_streak"] == 0
        assert data["difficulty_statistics"][0] == {"difficulty": "Unrated", "count": 1}
