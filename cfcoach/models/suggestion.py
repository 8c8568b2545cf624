from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum, IntEnum


class SuggestionType(str, Enum):
    PRACTICE = 'practice'
    IMPROVEMENT = 'improvement'
    TOPIC = 'topic'
    CONTEST = 'contest'
    STREAK = 'streak'

    @property
    def icon(self) -> str:
        return _TYPE_ICONS[self]

    @property
    def color(self) -> str:
        return _TYPE_COLORS[self]


_TYPE_ICONS = {
    SuggestionType.PRACTICE: 'book.fill',
    SuggestionType.IMPROVEMENT: 'chart.line.uptrend.xyaxis',
    SuggestionType.TOPIC: 'tag.fill',
    SuggestionType.CONTEST: 'trophy.fill',
    SuggestionType.STREAK: 'flame.fill',
}

_TYPE_COLORS = {
    SuggestionType.PRACTICE: 'blue',
    SuggestionType.IMPROVEMENT: 'green',
    SuggestionType.TOPIC: 'purple',
    SuggestionType.CONTEST: 'orange',
    SuggestionType.STREAK: 'red',
}


class SuggestionPriority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def display_text(self) -> str:
        return self.name.capitalize()


class RecommendationPriority(str, Enum):
    """Priority of a locally generated recommendation.

    Deliberately separate from SuggestionPriority; the two are not
    interchangeable.
    """

    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'

    @property
    def color(self) -> str:
        return {'high': 'red', 'medium': 'orange', 'low': 'blue'}[self.value]


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class AISuggestion:
    """One coaching suggestion decoded from the model reply."""

    title: str
    description: str
    type: SuggestionType
    priority: SuggestionPriority
    action_text: str
    action_url: str | None = None
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'type': self.type.value,
            'icon': self.type.icon,
            'color': self.type.color,
            'priority': int(self.priority),
            'priority_text': self.priority.display_text,
            'action_text': self.action_text,
            'action_url': self.action_url,
        }


@dataclass(frozen=True)
class ProblemRecommendation:
    """A deterministic practice recommendation built without the LLM."""

    title: str
    difficulty: str
    topic: str
    reason: str
    url: str
    priority: RecommendationPriority
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'difficulty': self.difficulty,
            'topic': self.topic,
            'reason': self.reason,
            'url': self.url,
            'priority': self.priority.value,
            'color': self.priority.color,
        }
