"""Shared test fixtures for the CF Coach test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from cfcoach import create_app
from cfcoach.analysis.llm import LLMResponse
from cfcoach.models import Problem, Submission, UserProfile

NOW = datetime(2025, 7, 1, 12, 0, tzinfo=timezone.utc)

WELL_FORMED_REPLY = """Here is your plan.

SUGGESTION_1:
Type: practice
Priority: high
Title: Dynamic Programming - Knapsack
Description: Solve 1400-1600 rated dp problems to close your biggest gap.
Action: Practice Now
URL: https://codeforces.com/problemset?tags=dp

SUGGESTION_2:
Type: streak
Priority: low
Title: Keep a daily streak
Description: One problem per day keeps your momentum.
Action: Start Today
URL: none
"""


class StubProvider:
    """LLM provider double returning canned text or raising a canned error."""

    PROVIDER_NAME = "stub"

    def __init__(self, content=WELL_FORMED_REPLY, error=None):
        self.content = content
        self.error = error
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model="stub-model", provider="stub")


def make_submission(
    name="A",
    rating=None,
    tags=(),
    verdict="OK",
    language="GNU C++17",
    days_ago=0,
    contest_id=1,
    index="A",
    now=NOW,
):
    """Build a Submission with sensible defaults."""
    return Submission(
        problem=Problem(
            name=name, index=index, rating=rating, tags=tuple(tags),
            contest_id=contest_id,
        ),
        verdict=verdict,
        language=language,
        creation_time=now - timedelta(days=days_ago),
    )


@pytest.fixture()
def now():
    return NOW


@pytest.fixture()
def profile():
    return UserProfile(handle="tourist_jr", rating=1500, max_rating=1620, rank="specialist")


@pytest.fixture()
def sample_submissions():
    """A small newest-first history with mixed verdicts, ratings and tags."""
    return [
        make_submission("Knapsack", 1500, ["dp"], days_ago=1),
        make_submission("Knapsack", 1500, ["dp"], verdict="WRONG_ANSWER", days_ago=1),
        make_submission("Two Sum", 1000, ["greedy", "sorting"], days_ago=2),
        make_submission("Watermelon", 800, ["math", "brute force"], days_ago=3),
        make_submission("Graph Walk", 1700, ["graphs", "dfs and similar"],
                        verdict="TIME_LIMIT_EXCEEDED", language="Python 3", days_ago=5),
        make_submission("Old Problem", None, ["implementation"], days_ago=40),
    ]


@pytest.fixture()
def stub_provider():
    return StubProvider()


@pytest.fixture()
def app(stub_provider):
    """Create a Flask application configured for testing with a stub provider."""
    application = create_app('testing', provider=stub_provider)
    yield application


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""
    return app.test_client()
