from __future__ import annotations

from dataclasses import dataclass, field

CODEFORCES_BASE_URL = 'https://codeforces.com'

# Upper bounds (exclusive) of the qualitative difficulty buckets.
DIFFICULTY_LEVELS = (
    (1200, 'Beginner'),
    (1600, 'Easy'),
    (2000, 'Medium'),
    (2400, 'Hard'),
)
DIFFICULTY_ORDER = ['Unrated', 'Beginner', 'Easy', 'Medium', 'Hard', 'Expert']


def _dedupe(tags) -> tuple:
    seen = []
    for tag in tags or ():
        if tag and tag not in seen:
            seen.append(tag)
    return tuple(seen)


@dataclass(frozen=True)
class Problem:
    """A Codeforces problem as reported by the submission supplier."""

    name: str
    index: str = ''
    rating: int | None = None
    tags: tuple = field(default_factory=tuple)
    contest_id: int | None = None

    def __post_init__(self):
        # Codeforces occasionally repeats a tag; keep first-seen order.
        object.__setattr__(self, 'tags', _dedupe(self.tags))

    @property
    def difficulty(self) -> str:
        if not self.rating:
            return 'Unrated'
        for upper, label in DIFFICULTY_LEVELS:
            if self.rating < upper:
                return label
        return 'Expert'

    @property
    def url(self) -> str | None:
        if self.contest_id is None or not self.index:
            return None
        return f'{CODEFORCES_BASE_URL}/problemset/problem/{self.contest_id}/{self.index}'

    @classmethod
    def from_dict(cls, data: dict) -> 'Problem':
        """Build a problem from a Codeforces API or snake_case payload."""
        if not isinstance(data, dict):
            raise ValueError('problem must be an object')
        name = data.get('name')
        if not name:
            raise ValueError('problem name is required')
        tags = data.get('tags') or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError('problem tags must be a list of strings')
        rating = data.get('rating')
        contest_id = data.get('contestId', data.get('contest_id'))
        return cls(
            name=name,
            index=data.get('index', '') or '',
            rating=int(rating) if rating is not None else None,
            tags=tuple(tags),
            contest_id=int(contest_id) if contest_id is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'index': self.index,
            'rating': self.rating,
            'tags': list(self.tags),
            'contest_id': self.contest_id,
            'difficulty': self.difficulty,
            'url': self.url,
        }

    def __repr__(self) -> str:
        return f'<Problem {self.contest_id}{self.index} {self.name!r}>'
