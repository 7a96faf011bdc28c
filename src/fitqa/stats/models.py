"""Value objects returned by the question statistics repository."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SavedQuestion:
    id: int
    user_id: int
    question: str
    category: str
    created_at: str

    def to_dict(self) -> dict[str, str | int]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "question": self.question,
            "category": self.category,
            "created_at": self.created_at,
        }


@dataclass(frozen=True, slots=True)
class UserStats:
    """Per-category question counts for one user."""

    user_id: int
    counts: dict[str, int]
    total_questions: int
    weighted_score: float
    updated_at: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "user_id": self.user_id,
            "counts": dict(self.counts),
            "total_questions": self.total_questions,
            "weighted_score": self.weighted_score,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True, slots=True)
class PeriodStats:
    start_date: str
    end_date: str
    days: int
    stats: UserStats

    def to_dict(self) -> dict[str, object]:
        return {
            "period": {"start_date": self.start_date, "end_date": self.end_date, "days": self.days},
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class UserPreferences:
    primary_interest: str
    total_questions: int
    distribution: dict[str, int]
    weighted_score: float

    def to_dict(self) -> dict[str, object]:
        return {
            "primary_interest": self.primary_interest,
            "total_questions": self.total_questions,
            "distribution": dict(self.distribution),
            "weighted_score": self.weighted_score,
        }


@dataclass(frozen=True, slots=True)
class GlobalStats:
    total_users: int
    total_questions: int
    distribution: dict[str, int] = field(default_factory=dict)
    average_weighted_score: float = 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "total_users": self.total_users,
            "total_questions": self.total_questions,
            "distribution": dict(self.distribution),
            "average_weighted_score": self.average_weighted_score,
        }
