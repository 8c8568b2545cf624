from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .problem import Problem

# Codeforces reports an accepted run with this verdict.
ACCEPTED_VERDICT = 'OK'


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_time(data: dict) -> datetime:
    seconds = data.get('creationTimeSeconds')
    if seconds is not None:
        return datetime.fromtimestamp(int(seconds), tz=timezone.utc)
    raw = data.get('creation_time') or data.get('submitted_at')
    if isinstance(raw, datetime):
        return as_utc(raw)
    if isinstance(raw, str) and raw:
        return as_utc(datetime.fromisoformat(raw))
    raise ValueError('submission creation time is required')


@dataclass(frozen=True)
class Submission:
    """A single judged run of a problem, newest-first in supplier lists."""

    problem: Problem
    verdict: str | None
    language: str
    creation_time: datetime
    id: int | None = None
    time_ms: int = 0
    memory_bytes: int = 0
    passed_test_count: int = 0

    @property
    def is_accepted(self) -> bool:
        return self.verdict == ACCEPTED_VERDICT

    @classmethod
    def from_dict(cls, data: dict) -> 'Submission':
        """Build a submission from a Codeforces API or snake_case payload.

        Raises:
            ValueError: If the problem or creation time is missing or malformed.
        """
        if not isinstance(data, dict):
            raise ValueError('submission must be an object')
        try:
            return cls(
                id=data.get('id'),
                problem=Problem.from_dict(data.get('problem')),
                verdict=data.get('verdict'),
                language=(
                    data.get('programmingLanguage')
                    or data.get('language')
                    or ''
                ),
                creation_time=_parse_time(data),
                time_ms=int(data.get('timeConsumedMillis', data.get('time_ms', 0)) or 0),
                memory_bytes=int(data.get('memoryConsumedBytes', data.get('memory_bytes', 0)) or 0),
                passed_test_count=int(data.get('passedTestCount', data.get('passed_test_count', 0)) or 0),
            )
        except (TypeError, OverflowError) as e:
            raise ValueError(f'malformed submission: {e}') from e

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'problem': self.problem.to_dict(),
            'verdict': self.verdict,
            'language': self.language,
            'creation_time': self.creation_time.isoformat(),
            'time_ms': self.time_ms,
            'memory_bytes': self.memory_bytes,
            'passed_test_count': self.passed_test_count,
        }

    def __repr__(self) -> str:
        return (
            f'<Submission {self.id} '
            f'verdict={self.verdict!r} problem={self.problem.name!r}>'
        )
