from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """Public Codeforces profile of the handle being coached."""

    handle: str
    rating: int | None = None
    max_rating: int | None = None
    rank: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> 'UserProfile':
        if not isinstance(data, dict):
            raise ValueError('profile must be an object')
        handle = data.get('handle')
        if not handle:
            raise ValueError('profile handle is required')
        rating = data.get('rating')
        max_rating = data.get('maxRating', data.get('max_rating'))
        try:
            return cls(
                handle=handle,
                rating=int(rating) if rating is not None else None,
                max_rating=int(max_rating) if max_rating is not None else None,
                rank=data.get('rank'),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f'malformed profile: {e}') from e

    def to_dict(self) -> dict:
        return {
            'handle': self.handle,
            'rating': self.rating,
            'max_rating': self.max_rating,
            'rank': self.rank,
        }
