"""
Problem recommender.

Builds practice recommendations locally, without the LLM, from the topics a
user has rarely solved and from how far their solved-problem ratings lag
behind their contest rating. The output is deterministic for a given input.
"""
from __future__ import annotations

from urllib.parse import quote

from cfcoach.models import ProblemRecommendation, RecommendationPriority
from .statistics import accepted_only, tag_counts

# Topics every rated competitor is expected to practise. Narrower than the
# canonical list used by the coaching prompt.
ESSENTIAL_TOPICS = [
    "implementation",
    "math",
    "greedy",
    "dp",
    "graphs",
    "data structures",
    "binary search",
    "two pointers",
    "sorting",
    "strings",
    "brute force",
]

# An essential topic solved fewer times than this gets a recommendation.
# Intentionally stricter than PROMPT_WEAK_TOPIC_THRESHOLD in statistics.
RECOMMENDER_WEAK_TOPIC_THRESHOLD = 5

# Rating assumed for quick problem sets when the user is unrated.
DEFAULT_WORKING_RATING = 1200

MAX_TOPIC_RECOMMENDATIONS = 3
RATING_LAG_THRESHOLD = 100

PROBLEMSET_URL = "https://codeforces.com/problemset"
CONTESTS_URL = "https://codeforces.com/contests"


def topic_url(topic: str) -> str:
    return f"{PROBLEMSET_URL}?tags={quote(topic)}&order=BY_RATING_ASC"


class ProblemRecommender:
    """Recommends practice areas based on weak topics and rating progression.

    Args:
        submissions: Submission history; only accepted entries are used.
        user_rating: Current contest rating, or None/0 when unrated.
    """

    def __init__(self, submissions, user_rating: int | None = None):
        self.accepted = accepted_only(submissions)
        self.has_rating = bool(user_rating and user_rating > 0)
        self.rating = user_rating if self.has_rating else 0

    def weak_topics(self) -> list[str]:
        """Essential topics solved fewer than RECOMMENDER_WEAK_TOPIC_THRESHOLD times."""
        counts = tag_counts(self.accepted)
        return [
            topic for topic in ESSENTIAL_TOPICS
            if counts.get(topic, 0) < RECOMMENDER_WEAK_TOPIC_THRESHOLD
        ]

    def topic_count(self, topic: str) -> int:
        """Number of accepted submissions whose problem carries ``topic``."""
        wanted = topic.lower()
        return sum(
            1 for s in self.accepted
            if any(tag.lower() == wanted for tag in s.problem.tags)
        )

    def average_solved_rating(self) -> int:
        # Unrated problems add nothing to the sum but still count in the divisor.
        total = sum(
            s.problem.rating for s in self.accepted if (s.problem.rating or 0) > 0
        )
        return total // max(len(self.accepted), 1)

    def recommend(self, limit: int = 5) -> list[ProblemRecommendation]:
        """Generate recommendations.

        Strategy:
            1. One high-priority entry for each of the first three weak topics,
               targeting rating - 50 to rating + 150.
            2. A "Challenge Yourself" entry when the average solved rating is
               more than RATING_LAG_THRESHOLD below the user's rating.

        Args:
            limit: Maximum number of recommendations to return.

        Returns:
            At most ``limit`` recommendations; empty when there is no accepted
            history or the user is unrated.
        """
        if limit <= 0 or not self.accepted or not self.has_rating:
            return []

        rating = self.rating
        recommendations = []

        for topic in self.weak_topics()[:MAX_TOPIC_RECOMMENDATIONS]:
            recommendations.append(
                ProblemRecommendation(
                    title=f"Master {topic.title()}",
                    difficulty=f"Rating {rating - 50} - {rating + 150}",
                    topic=topic,
                    reason=(
                        f"You've solved only {self.topic_count(topic)} "
                        f"problems in this area"
                    ),
                    url=topic_url(topic),
                    priority=RecommendationPriority.HIGH,
                )
            )

        if self.average_solved_rating() < rating - RATING_LAG_THRESHOLD:
            recommendations.append(
                ProblemRecommendation(
                    title="Challenge Yourself",
                    difficulty=f"Rating {rating} - {rating + 200}",
                    topic="mixed",
                    reason="Your recent problems are too easy. Time to level up!",
                    url=f"{PROBLEMSET_URL}?order=BY_RATING_ASC",
                    priority=RecommendationPriority.HIGH,
                )
            )

        return recommendations[:limit]


def recommend(submissions, user_rating: int | None, target_count: int = 5) -> list[ProblemRecommendation]:
    """Shortcut for ``ProblemRecommender(submissions, user_rating).recommend()``."""
    return ProblemRecommender(submissions, user_rating).recommend(target_count)


def quick_problem_set(user_rating: int | None, weak_topic: str | None = None) -> list[str]:
    """Problemset links for a short practice session.

    A topic-specific list comes first when ``weak_topic`` is given, followed by
    the problemset filtered to rating - 200 (at least 800) up to rating + 300,
    and the contest list.
    """
    rating = user_rating if user_rating and user_rating > 0 else DEFAULT_WORKING_RATING
    low = max(800, rating - 200)
    high = rating + 300

    urls = []
    if weak_topic:
        urls.append(topic_url(weak_topic))
    urls.append(f"{PROBLEMSET_URL}?tags={low}-{high}&order=BY_RATING_ASC")
    urls.append(CONTESTS_URL)
    return urls
