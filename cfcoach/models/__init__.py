from .problem import Problem
from .submission import Submission, ACCEPTED_VERDICT
from .user_profile import UserProfile
from .suggestion import (
    AISuggestion,
    ProblemRecommendation,
    RecommendationPriority,
    SuggestionPriority,
    SuggestionType,
)

__all__ = [
    'Problem',
    'Submission',
    'ACCEPTED_VERDICT',
    'UserProfile',
    'AISuggestion',
    'ProblemRecommendation',
    'RecommendationPriority',
    'SuggestionPriority',
    'SuggestionType',
]
