"""SQLite-backed storage for classified questions and per-user statistics."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging
from pathlib import Path
import sqlite3

from fitqa.classification.lexicon import CategoryLexicon, load_default_lexicon
from fitqa.stats.models import GlobalStats, PeriodStats, SavedQuestion, UserPreferences, UserStats
from fitqa.stats.schema import apply_runtime_pragmas, ensure_schema
from fitqa.stats.scoring import weighted_score


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_PERIOD_DAYS = 7
MAX_PERIOD_DAYS = 30

logger = logging.getLogger(__name__)


class UnknownCategoryError(LookupError):
    """Raised when a question references a category that was never seeded."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def _validate_user_id(user_id: int) -> None:
    if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id < 1:
        raise ValueError("user_id must be a positive integer")


class QuestionRepository:
    """Thin persistence layer for questions, categories and derived stats."""

    def __init__(self, db_path: str | Path, lexicon: CategoryLexicon | None = None) -> None:
        self._db_path = Path(db_path)
        self._lexicon = lexicon if lexicon is not None else load_default_lexicon()
        self._connection = sqlite3.connect(str(self._db_path))
        self._connection.row_factory = sqlite3.Row
        apply_runtime_pragmas(self._connection)
        ensure_schema(self._connection)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    @property
    def lexicon(self) -> CategoryLexicon:
        return self._lexicon

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "QuestionRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def seed_categories(self) -> None:
        """Insert or update the lexicon categories (idempotent)."""
        with self._connection:
            for category in self._lexicon:
                self._connection.execute(
                    """
                    INSERT INTO categories(name, label)
                    VALUES(?, ?)
                    ON CONFLICT(name) DO UPDATE SET label = excluded.label
                    """,
                    (category.name, category.label),
                )

    def _category_id(self, name: str) -> int:
        row = self._connection.execute(
            "SELECT id FROM categories WHERE name = ?",
            (name,),
        ).fetchone()
        if row is None:
            raise UnknownCategoryError(f"Category not found: {name}")
        return int(row["id"])

    def save_question(
        self,
        user_id: int,
        question: str,
        category_name: str,
        *,
        created_at: datetime | None = None,
    ) -> SavedQuestion:
        _validate_user_id(user_id)
        category_id = self._category_id(category_name)
        timestamp = _format_timestamp(created_at or _utcnow())

        with self._connection:
            cursor = self._connection.execute(
                """
                INSERT INTO questions(user_id, question, category_id, created_at)
                VALUES(?, ?, ?, ?)
                """,
                (user_id, question, category_id, timestamp),
            )

        saved = SavedQuestion(
            id=int(cursor.lastrowid),
            user_id=user_id,
            question=question,
            category=category_name,
            created_at=timestamp,
        )
        logger.info("Saved question id=%s user=%s category=%s", saved.id, user_id, category_name)
        return saved

    def _count_by_category(
        self,
        user_id: int | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, int]:
        clauses: list[str] = []
        params: list[object] = []
        if user_id is not None:
            clauses.append("q.user_id = ?")
            params.append(user_id)
        if start is not None and end is not None:
            clauses.append("q.created_at BETWEEN ? AND ?")
            params.extend([_format_timestamp(start), _format_timestamp(end)])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._connection.execute(
            f"""
            SELECT c.name AS name, COUNT(q.id) AS count
            FROM questions q
            JOIN categories c ON c.id = q.category_id
            {where}
            GROUP BY c.name
            """,
            params,
        ).fetchall()

        counts = {name: 0 for name in self._lexicon.names()}
        for row in rows:
            if row["name"] in counts:
                counts[row["name"]] = int(row["count"])
        return counts

    def _build_stats(self, user_id: int, counts: dict[str, int]) -> UserStats:
        return UserStats(
            user_id=user_id,
            counts=counts,
            total_questions=sum(counts.values()),
            weighted_score=weighted_score(counts, self._lexicon),
            updated_at=_utcnow().isoformat(),
        )

    def get_user_stats(self, user_id: int) -> UserStats:
        _validate_user_id(user_id)
        return self._build_stats(user_id, self._count_by_category(user_id))

    def update_user_stats(self, user_id: int, category_name: str) -> UserStats:
        """Return fresh stats after a question was stored under *category_name*."""
        self._category_id(category_name)
        return self.get_user_stats(user_id)

    def get_stats_for_period(self, user_id: int, start: datetime, end: datetime) -> UserStats:
        _validate_user_id(user_id)
        if end < start:
            raise ValueError("end must not be earlier than start")
        return self._build_stats(user_id, self._count_by_category(user_id, start, end))

    def get_user_weekly_stats(
        self,
        user_id: int,
        days: int = DEFAULT_PERIOD_DAYS,
        *,
        now: datetime | None = None,
    ) -> PeriodStats:
        if not 1 <= days <= MAX_PERIOD_DAYS:
            raise ValueError(f"days must be between 1 and {MAX_PERIOD_DAYS}")

        end = now or _utcnow()
        start = end - timedelta(days=days)
        stats = self.get_stats_for_period(user_id, start, end)
        return PeriodStats(
            start_date=start.date().isoformat(),
            end_date=end.date().isoformat(),
            days=days,
            stats=stats,
        )

    def get_user_preferences(self, user_id: int) -> UserPreferences:
        """Return the user's most asked category; ties go to the default category first."""
        stats = self.get_user_stats(user_id)
        default = self._lexicon.default_category
        primary = default
        best_count = stats.counts[default]
        for name in self._lexicon.names():
            count = stats.counts[name]
            if count > best_count:
                primary = name
                best_count = count

        return UserPreferences(
            primary_interest=primary,
            total_questions=stats.total_questions,
            distribution=dict(stats.counts),
            weighted_score=stats.weighted_score,
        )

    def get_global_stats(self) -> GlobalStats:
        rows = self._connection.execute(
            """
            SELECT q.user_id AS user_id, c.name AS name, COUNT(q.id) AS count
            FROM questions q
            JOIN categories c ON c.id = q.category_id
            GROUP BY q.user_id, c.name
            ORDER BY q.user_id
            """
        ).fetchall()

        distribution = {name: 0 for name in self._lexicon.names()}
        per_user: dict[int, dict[str, int]] = {}
        for row in rows:
            name = row["name"]
            if name not in distribution:
                continue
            count = int(row["count"])
            distribution[name] += count
            per_user.setdefault(int(row["user_id"]), {})[name] = count

        user_scores = [weighted_score(counts, self._lexicon) for counts in per_user.values()]
        average = round(sum(user_scores) / len(user_scores), 2) if user_scores else 0.0

        return GlobalStats(
            total_users=len(per_user),
            total_questions=sum(distribution.values()),
            distribution=distribution,
            average_weighted_score=average,
        )
