"""
Practice insights shown next to the coaching suggestions.

Small summaries of a user's habits: favourite language and topic, the current
daily streak, this week's volume and the difficulty mix of solved problems.
"""
from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta, timezone

from cfcoach.models.problem import DIFFICULTY_ORDER
from cfcoach.models.submission import as_utc
from .statistics import accepted_only, primary_language, tag_counts

STREAK_LOOKBACK_DAYS = 30


def favorite_topic(submissions) -> str | None:
    """Most solved tag, first seen wins a tie."""
    counts = tag_counts(submissions)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def current_streak(submissions, now: datetime | None = None) -> int:
    """Consecutive UTC days, ending today, with at least one submission.

    Looks back at most STREAK_LOOKBACK_DAYS days.
    """
    now = as_utc(now) if now else datetime.now(timezone.utc)
    active_days = {as_utc(s.creation_time).date() for s in submissions}

    streak = 0
    day = now.date()
    for _ in range(STREAK_LOOKBACK_DAYS):
        if day not in active_days:
            break
        streak += 1
        day -= timedelta(days=1)
    return streak


def week_submissions(submissions, now: datetime | None = None) -> int:
    now = as_utc(now) if now else datetime.now(timezone.utc)
    since = now - timedelta(weeks=1)
    return sum(1 for s in submissions if as_utc(s.creation_time) >= since)


def difficulty_statistics(submissions) -> list[tuple[str, int]]:
    """Solved problems per difficulty bucket, empty buckets omitted."""
    counts = Counter(s.problem.difficulty for s in accepted_only(submissions))
    return [(level, counts[level]) for level in DIFFICULTY_ORDER if counts.get(level)]


def practice_insights(submissions, now: datetime | None = None) -> dict:
    submissions = list(submissions)
    return {
        "most_used_language": primary_language(submissions),
        "favorite_topic": favorite_topic(submissions),
        "current_streak": current_streak(submissions, now=now),
        "week_submissions": week_submissions(submissions, now=now),
        "difficulty_statistics": [
            {"difficulty": level, "count": count}
            for level, count in difficulty_statistics(submissions)
        ],
    }
