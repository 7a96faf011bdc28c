"""Classify a user question, store it and refresh the user's statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging

from fitqa.classification.classifier import QuestionClassifier
from fitqa.classification.errors import InvalidInputError
from fitqa.classification.resolver import ClassificationResult
from fitqa.config import DEFAULT_MAX_QUESTION_CHARS
from fitqa.service.validation import validate_question_input
from fitqa.stats.models import UserStats
from fitqa.stats.repository import QuestionRepository


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AskResponse:
    category: str
    confidence: float
    user_stats: UserStats
    timestamp: str
    classification: ClassificationResult

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "confidence": self.confidence,
            "user_stats": self.user_stats.to_dict(),
            "timestamp": self.timestamp,
        }


class QuestionService:
    """Runs the full ask flow on top of a shared classifier and repository."""

    def __init__(
        self,
        classifier: QuestionClassifier,
        repository: QuestionRepository,
        *,
        max_question_chars: int = DEFAULT_MAX_QUESTION_CHARS,
    ) -> None:
        if classifier.lexicon.weights() != repository.lexicon.weights():
            raise ValueError("classifier and repository must share category weights")
        self._classifier = classifier
        self._repository = repository
        self._max_question_chars = max_question_chars

    def ask(self, user_id: int, question: str) -> AskResponse:
        errors = validate_question_input(question, user_id, max_chars=self._max_question_chars)
        if errors:
            raise InvalidInputError("; ".join(errors))

        result = self._classifier.classify(question)
        try:
            self._repository.save_question(user_id, question, result.category)
            stats = self._repository.update_user_stats(user_id, result.category)
        except Exception:
            logger.exception("Failed to store question for user %s", user_id)
            raise

        return AskResponse(
            category=result.category,
            confidence=result.confidence,
            user_stats=stats,
            timestamp=datetime.now(timezone.utc).isoformat(),
            classification=result,
        )
