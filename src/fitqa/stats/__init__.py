"""Question persistence and per-user statistics."""

from .models import GlobalStats, PeriodStats, SavedQuestion, UserPreferences, UserStats
from .repository import QuestionRepository, UnknownCategoryError
from .scoring import weighted_score

__all__ = [
    "GlobalStats",
    "PeriodStats",
    "QuestionRepository",
    "SavedQuestion",
    "UnknownCategoryError",
    "UserPreferences",
    "UserStats",
    "weighted_score",
]
