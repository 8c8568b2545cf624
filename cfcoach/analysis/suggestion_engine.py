"""
AI suggestion orchestrator.

Sequences statistics -> prompt -> LLM provider -> parser for one user and owns
the resulting (state, suggestions, error) triple. One engine instance is built
by the application factory and handed to its consumers.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime
from enum import Enum

from cfcoach.models import AISuggestion, ProblemRecommendation, UserProfile
from .llm import LLMError
from .prompts.coaching_suggestions import render_coaching_prompt
from .recommender import recommend
from .statistics import AnalysisSnapshot, analyze
from .suggestion_parser import parse_suggestions

logger = logging.getLogger(__name__)

RETRYABLE_FAILURE_MESSAGE = "Failed to generate suggestions. Please try again."


class EngineState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


def failure_message(error: LLMError) -> str:
    """User-facing text for a provider failure.

    Configuration problems are reported as such; every other failure kind
    collapses into one generic, retryable message.
    """
    if not error.retryable:
        return f"AI service is not configured correctly: {error}"
    return RETRYABLE_FAILURE_MESSAGE


class SuggestionEngine:
    """Produces AI coaching suggestions and keeps the latest result.

    At most one provider call is in flight per engine: a ``refresh`` arriving
    while another is loading is rejected. The state triple is only replaced
    under the engine lock, so readers never observe a partial update.

    Args:
        provider: Object with ``generate(prompt) -> LLMResponse`` that raises
            ``LLMError`` on failure (see ``cfcoach.analysis.llm``).
    """

    def __init__(self, provider):
        self.provider = provider
        self._lock = threading.Lock()
        self._state = EngineState.IDLE
        self._suggestions: list[AISuggestion] = []
        self._error: str | None = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        with self._lock:
            return self._state

    def current_suggestions(self) -> list[AISuggestion]:
        with self._lock:
            return list(self._suggestions)

    def current_error(self) -> str | None:
        with self._lock:
            return self._error

    def is_loading(self) -> bool:
        return self.state is EngineState.LOADING

    def snapshot(self) -> dict:
        """Consistent JSON-ready view of the whole state triple."""
        with self._lock:
            return {
                "state": self._state.value,
                "loading": self._state is EngineState.LOADING,
                "error": self._error,
                "suggestions": [s.to_dict() for s in self._suggestions],
            }

    # ------------------------------------------------------------------
    # Stateless helpers
    # ------------------------------------------------------------------

    @staticmethod
    def analyze(
        profile: UserProfile | None, submissions, now: datetime | None = None,
    ) -> AnalysisSnapshot:
        return analyze(submissions, profile, now=now)

    @staticmethod
    def recommend(
        profile: UserProfile | None, submissions, target_count: int = 5,
    ) -> list[ProblemRecommendation]:
        return recommend(
            submissions, profile.rating if profile else None, target_count,
        )

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def _begin(self) -> bool:
        with self._lock:
            if self._state is EngineState.LOADING:
                return False
            self._state = EngineState.LOADING
            return True

    def _finish(self, state: EngineState, suggestions=None, error=None):
        with self._lock:
            self._state = state
            self._error = error
            if suggestions is not None:
                self._suggestions = suggestions

    def refresh(
        self,
        profile: UserProfile | None,
        submissions,
        now: datetime | None = None,
    ) -> bool:
        """Regenerate suggestions from the given submission history.

        On success the suggestion list is replaced and the error cleared. On a
        provider failure the engine moves to FAILED with a user-facing message
        and the previous suggestions are kept. Nothing is retried
        automatically; call ``refresh`` again to retry.

        Args:
            profile: User profile, or None when unknown.
            submissions: All submissions, newest-first.
            now: Reference time for the recent-activity window.

        Returns:
            False if the call was rejected because a refresh is already
            running, True otherwise (whether it ended READY or FAILED).
        """
        if not self._begin():
            logger.warning("Suggestion refresh rejected: another refresh is running")
            return False

        handle = profile.handle if profile else "<anonymous>"
        logger.info(f"Refreshing AI suggestions for {handle}")

        try:
            snapshot = analyze(submissions, profile, now=now)
            prompt = render_coaching_prompt(snapshot)
            response = self.provider.generate(prompt)
        except LLMError as e:
            logger.warning(f"AI suggestion call failed ({e.kind}) for {handle}: {e}")
            self._finish(EngineState.FAILED, error=failure_message(e))
            return True
        except Exception:
            logger.exception(f"Unexpected error while refreshing suggestions for {handle}")
            self._finish(EngineState.FAILED, error=RETRYABLE_FAILURE_MESSAGE)
            raise

        suggestions = parse_suggestions(response.content)
        self._finish(EngineState.READY, suggestions=suggestions)
        logger.info(
            f"AI suggestions ready for {handle}: {len(suggestions)} suggestions "
            f"(model={response.model}, latency={response.latency_ms}ms)"
        )
        return True
