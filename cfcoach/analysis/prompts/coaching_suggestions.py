"""
Prompt template for AI coaching suggestions.

Renders a user's submission statistics into one instruction document and asks
the model for 4-6 ``SUGGESTION_<n>:`` blocks that the suggestion parser can
decode.
"""
from __future__ import annotations

from datetime import datetime

from cfcoach.models import UserProfile
from ..statistics import AnalysisSnapshot, analyze


def format_rating_distribution(distribution: dict) -> str:
    """One line per non-empty bucket: ``<bucket>: <n> problems (<p>%)``."""
    lines = [
        f"{label}: {info['count']} problems ({info['percent']:.1f}%)"
        for label, info in distribution.items()
        if info["count"] > 0
    ]
    return "\n".join(lines) if lines else "No solved problems yet"


def format_topic_analysis(weak: list, strong: list) -> str:
    weak_text = ", ".join(weak) if weak else "None identified"
    strong_text = ", ".join(f"{tag} ({count})" for tag, count in strong) or "None yet"
    return (
        f"Weak Areas (need focus): {weak_text}\n"
        f"Strong Areas: {strong_text}"
    )


def format_progression(progression: dict) -> str:
    return (
        f"Average problem rating solved recently: {progression['avg_recent_rating']}\n"
        f"Current user rating: {progression['user_rating']}\n"
        f"Recommended next difficulty range: "
        f"{progression['recommended_min']} - {progression['recommended_max']}"
    )


def format_recent_performance(recent: dict) -> str:
    return (
        f"Recent submissions: {recent['count']}\n"
        f"Recent acceptance rate: {recent['acceptance_rate']:.1f}%\n"
        f"Unique problems solved: {recent['unique_accepted_problems']}\n"
        f"Activity level: {recent['activity_level']}"
    )


def render_coaching_prompt(snapshot: AnalysisSnapshot) -> str:
    """Render an already computed analysis into the coaching prompt."""
    profile = snapshot.profile
    rating = (profile.rating if profile else None) or 0
    max_rating = (profile.max_rating if profile else None) or 0
    rank = (profile.rank if profile else None) or "Unrated"

    return f"""You are an AI coach for competitive programming. Analyze this Codeforces user's data and recommend SPECIFIC problems they should solve next.

USER PROFILE:
- Current Rating: {rating}
- Max Rating: {max_rating}
- Rank: {rank}
- Total Submissions: {snapshot.total_submissions}
- Accepted Solutions: {snapshot.accepted_submissions}
- Acceptance Rate: {snapshot.acceptance_rate:.1f}%

PROBLEM DIFFICULTY ANALYSIS:
{format_rating_distribution(snapshot.rating_distribution)}

TOPIC WEAKNESSES IDENTIFIED:
{format_topic_analysis(snapshot.weak_topics, snapshot.strong_topics)}

DIFFICULTY PROGRESSION ANALYSIS:
{format_progression(snapshot.progression)}

RECENT PERFORMANCE (Last 2 weeks):
{format_recent_performance(snapshot.recent)}

PRIMARY LANGUAGE: {snapshot.primary_language or "Not specified"}

Based on this analysis, provide exactly 4-6 SPECIFIC problem recommendations in this format:

SUGGESTION_1:
Type: practice
Priority: high
Title: [Specific topic like "Dynamic Programming - LCS Problems"]
Description: [Why this topic is important for their growth and what rating range to target]
Action: Practice Now
URL: https://codeforces.com/problemset?tags=[specific-tag]

SUGGESTION_2:
Type: improvement
Priority: medium
Title: [Specific weakness like "Graph Theory - DFS/BFS"]
Description: [Detailed explanation of why they need this and expected improvement]
Action: Study Topic
URL: https://codeforces.com/problemset?tags=[specific-tag]

[Continue for 4-6 suggestions]

Rules for every suggestion:
- Type is one of: practice, improvement, topic, contest, streak
- Priority is one of: high, medium, low
- Title, Description and Action must each fit on a single line
- Write "URL: none" when there is no relevant link

Focus on:
1. Identifying their current skill level and next logical step
2. Recommending problems 100-200 rating points above their current level
3. Addressing their weakest topics first
4. Suggesting rating-appropriate contest problems
5. Building consistency in problem-solving patterns

Make each recommendation specific with exact Codeforces problem tags and rating ranges!"""


def build_coaching_prompt(
    profile: UserProfile | None,
    submissions,
    now: datetime | None = None,
) -> str:
    """Build the coaching prompt text.

    Args:
        profile: User profile, or None when unknown.
        submissions: All submissions, newest-first.
        now: Reference time for the recent-activity window.

    Returns:
        The full prompt. Missing data is rendered as placeholders.
    """
    return render_coaching_prompt(analyze(submissions, profile, now=now))
