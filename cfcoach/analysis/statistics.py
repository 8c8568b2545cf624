"""
Submission statistics.

Pure functions over a list of Codeforces submissions: rating distribution of
solved problems, topic strengths and weaknesses, difficulty progression and
recent activity. None of them mutate their input or keep state, so they can be
called in any order and from any thread.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from cfcoach.models import Submission, UserProfile
from cfcoach.models.submission import as_utc

# (label, lower bound inclusive, upper bound exclusive); None = unbounded.
RATING_BUCKETS = [
    ("Beginner (0-799)", 0, 800),
    ("Easy (800-1199)", 800, 1200),
    ("Medium (1200-1599)", 1200, 1600),
    ("Hard (1600-1999)", 1600, 2000),
    ("Expert (2000-2399)", 2000, 2400),
    ("Master (2400+)", 2400, None),
]

CANONICAL_TOPICS = [
    "implementation",
    "math",
    "greedy",
    "dp",
    "graph",
    "data structures",
    "binary search",
    "two pointers",
    "sorting",
    "strings",
    "number theory",
    "combinatorics",
    "geometry",
    "brute force",
]

# A canonical topic with fewer solved occurrences than this is reported as
# weak in the coaching prompt.
PROMPT_WEAK_TOPIC_THRESHOLD = 3

STRONG_TOPIC_COUNT = 3
PROGRESSION_WINDOW = 20
RECENT_WINDOW_DAYS = 14
HIGH_ACTIVITY_SUBMISSIONS = 10
MEDIUM_ACTIVITY_SUBMISSIONS = 5


def accepted_only(submissions) -> list[Submission]:
    return [s for s in submissions if s.is_accepted]


def rating_bucket(rating: int | None) -> str:
    """Return the bucket label for a problem rating.

    Unrated problems are counted as rating 0 and land in the Beginner bucket.
    """
    value = rating or 0
    for label, low, high in RATING_BUCKETS:
        if value >= low and (high is None or value < high):
            return label
    # Negative ratings do not occur on Codeforces; keep them in the first bucket.
    return RATING_BUCKETS[0][0]


def rating_distribution(accepted) -> dict[str, dict]:
    """Count solved problems per rating bucket.

    Args:
        accepted: Accepted submissions. Non-accepted entries are ignored.

    Returns:
        Dict keyed by bucket label in ascending rating order. Every bucket is
        present; each value has ``count`` and ``percent`` (one decimal).
    """
    solved = accepted_only(accepted)
    counts = Counter(rating_bucket(s.problem.rating) for s in solved)
    total = len(solved)

    result = {}
    for label, _, _ in RATING_BUCKETS:
        count = counts.get(label, 0)
        result[label] = {
            "count": count,
            "percent": round(count / total * 100, 1) if total > 0 else 0.0,
        }
    return result


def tag_counts(accepted) -> Counter:
    """Tag occurrences over accepted submissions, in first-encountered order."""
    counts = Counter()
    for s in accepted_only(accepted):
        for tag in s.problem.tags:
            counts[tag] += 1
    return counts


def topic_weaknesses(accepted) -> tuple[list[str], list[tuple[str, int]]]:
    """Find weak canonical topics and the strongest tags.

    Returns:
        Tuple ``(weak, strong)``. ``weak`` lists canonical topics with fewer
        than PROMPT_WEAK_TOPIC_THRESHOLD solved occurrences, in canonical
        order. ``strong`` holds the top three ``(tag, count)`` pairs; ties keep
        the order in which the tags were first seen.
    """
    counts = tag_counts(accepted)
    weak = [
        topic for topic in CANONICAL_TOPICS
        if counts.get(topic, 0) < PROMPT_WEAK_TOPIC_THRESHOLD
    ]
    strong = sorted(counts.items(), key=lambda item: -item[1])[:STRONG_TOPIC_COUNT]
    return weak, strong


def difficulty_progression(accepted, user_rating: int | None) -> dict:
    """Suggest the next difficulty band from recently solved problems.

    Only the first PROGRESSION_WINDOW accepted submissions are considered, so
    callers must pass the list newest-first. Unrated problems are skipped.
    """
    recent = accepted_only(accepted)[:PROGRESSION_WINDOW]
    ratings = [s.problem.rating for s in recent if (s.problem.rating or 0) > 0]
    avg_recent = sum(ratings) // len(ratings) if ratings else 0

    rating = user_rating or 0
    baseline = rating if rating > 0 else avg_recent
    return {
        "avg_recent_rating": avg_recent,
        "user_rating": rating,
        "recommended_min": baseline + 100,
        "recommended_max": baseline + 300,
    }


def activity_level(count: int) -> str:
    if count > HIGH_ACTIVITY_SUBMISSIONS:
        return "High"
    if count > MEDIUM_ACTIVITY_SUBMISSIONS:
        return "Medium"
    return "Low"


def recent_performance(submissions, now: datetime | None = None) -> dict:
    """Summarize activity over the trailing RECENT_WINDOW_DAYS days.

    Args:
        submissions: All submissions, accepted or not.
        now: Reference time; defaults to the current UTC time.
    """
    now = as_utc(now) if now else datetime.now(timezone.utc)
    since = now - timedelta(days=RECENT_WINDOW_DAYS)

    recent = [s for s in submissions if as_utc(s.creation_time) >= since]
    recent_accepted = accepted_only(recent)
    count = len(recent)
    return {
        "count": count,
        "accepted_count": len(recent_accepted),
        "acceptance_rate": (
            round(len(recent_accepted) / count * 100, 1) if count > 0 else 0.0
        ),
        "unique_accepted_problems": len({s.problem.name for s in recent_accepted}),
        "activity_level": activity_level(count),
    }


def primary_language(submissions) -> str | None:
    """Most frequently used language, first seen wins a tie."""
    counts = Counter(s.language for s in submissions if s.language)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


@dataclass
class AnalysisSnapshot:
    """All statistics the coaching prompt and API expose, computed together."""

    total_submissions: int
    accepted_submissions: int
    acceptance_rate: float
    rating_distribution: dict
    weak_topics: list
    strong_topics: list
    progression: dict
    recent: dict
    primary_language: str | None = None
    profile: UserProfile | None = None

    def to_dict(self) -> dict:
        return {
            "profile": self.profile.to_dict() if self.profile else None,
            "total_submissions": self.total_submissions,
            "accepted_submissions": self.accepted_submissions,
            "acceptance_rate": self.acceptance_rate,
            "rating_distribution": self.rating_distribution,
            "weak_topics": list(self.weak_topics),
            "strong_topics": [
                {"tag": tag, "count": count} for tag, count in self.strong_topics
            ],
            "progression": self.progression,
            "recent": self.recent,
            "primary_language": self.primary_language,
        }


def analyze(
    submissions,
    profile: UserProfile | None = None,
    now: datetime | None = None,
) -> AnalysisSnapshot:
    """Run every statistic over one submission list.

    Args:
        submissions: All submissions, newest-first.
        profile: Optional user profile; its rating drives the progression.
        now: Reference time for the recent-activity window.
    """
    submissions = list(submissions)
    accepted = accepted_only(submissions)
    total = len(submissions)
    weak, strong = topic_weaknesses(accepted)
    return AnalysisSnapshot(
        total_submissions=total,
        accepted_submissions=len(accepted),
        acceptance_rate=round(len(accepted) / total * 100, 1) if total > 0 else 0.0,
        rating_distribution=rating_distribution(accepted),
        weak_topics=weak,
        strong_topics=strong,
        progression=difficulty_progression(
            accepted, profile.rating if profile else None
        ),
        recent=recent_performance(submissions, now=now),
        primary_language=primary_language(submissions),
        profile=profile,
    )
