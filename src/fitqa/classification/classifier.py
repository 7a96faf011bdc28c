"""Question classifier tying preprocessing, scoring, boosting and resolution together."""

from __future__ import annotations

import logging
import time

from fitqa.classification.boosting import boost_scores
from fitqa.classification.errors import (
    ClassificationError,
    ClassificationTimeoutError,
    InvalidInputError,
)
from fitqa.classification.lemmatizer import Lemmatizer
from fitqa.classification.lexicon import CategoryLexicon, load_default_lexicon
from fitqa.classification.preprocess import lemmatize_tokens, normalize_text, tokenize
from fitqa.classification.resolver import ClassificationResult, resolve_scores
from fitqa.classification.similarity import (
    DEFAULT_MAX_EDIT_DISTANCE,
    DEFAULT_MIN_FUZZY_LENGTH,
    CategoryScore,
    score_category,
)


logger = logging.getLogger(__name__)


def _check_deadline(deadline: float | None, stage: str) -> None:
    if deadline is not None and time.monotonic() >= deadline:
        raise ClassificationTimeoutError(stage=stage, message="Classification deadline exceeded")


class QuestionClassifier:
    """Stateless lexical classifier bound to one immutable lexicon.

    The keyword lexicon is lemmatized once here, so every call compares
    lemmas against lemmas. A single instance is safe to share across threads.
    """

    def __init__(
        self,
        lexicon: CategoryLexicon | None = None,
        lemmatizer: Lemmatizer | None = None,
        *,
        min_fuzzy_length: int = DEFAULT_MIN_FUZZY_LENGTH,
        max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    ) -> None:
        if min_fuzzy_length < 1:
            raise ValueError("min_fuzzy_length must be >= 1")
        if max_edit_distance < 0:
            raise ValueError("max_edit_distance cannot be negative")

        base = lexicon if lexicon is not None else load_default_lexicon()
        self._lexicon = base
        self._lemmatizer = lemmatizer
        self._match_lexicon = base.lemmatized(lemmatizer) if lemmatizer is not None else base
        self._min_fuzzy_length = min_fuzzy_length
        self._max_edit_distance = max_edit_distance

    @property
    def lexicon(self) -> CategoryLexicon:
        return self._lexicon

    def list_categories(self) -> list[dict[str, str | int]]:
        return [category.to_dict() for category in self._lexicon]

    def preprocess(self, text: str) -> list[str]:
        return lemmatize_tokens(tokenize(normalize_text(text)), self._lemmatizer)

    def classify(self, text: str, *, deadline: float | None = None) -> ClassificationResult:
        """Classify *text* into one of the lexicon categories.

        ``deadline`` is an optional ``time.monotonic()`` timestamp; once it
        passes, the call aborts with :class:`ClassificationTimeoutError`.
        Invalid input raises :class:`InvalidInputError` unchanged, any other
        failure is wrapped in :class:`ClassificationError`.
        """
        stage = "preprocess"
        try:
            _check_deadline(deadline, stage)
            normalized = normalize_text(text)
            tokens = lemmatize_tokens(tokenize(normalized), self._lemmatizer)

            stage = "score"
            raw_scores: dict[str, CategoryScore] = {}
            for category in self._match_lexicon:
                _check_deadline(deadline, stage)
                raw_scores[category.name] = score_category(
                    tokens,
                    category,
                    max_distance=self._max_edit_distance,
                    min_fuzzy_length=self._min_fuzzy_length,
                )

            stage = "boost"
            _check_deadline(deadline, stage)
            scores = boost_scores(
                raw_scores,
                self._match_lexicon,
                normalized,
                tokens,
                max_distance=self._max_edit_distance,
                min_fuzzy_length=self._min_fuzzy_length,
            )

            stage = "resolve"
            result = resolve_scores(
                scores,
                self._lexicon,
                original_text=text,
                tokens=tokens,
                processed_text=normalized,
            )
        except (InvalidInputError, ClassificationError):
            raise
        except Exception as exc:
            logger.exception("Classification failed at stage %s", stage)
            raise ClassificationError(stage=stage, message=f"Failed to classify question: {exc}") from exc

        logger.debug(
            "Classified %r as %s (confidence %.2f%%)",
            result.processed_text,
            result.category,
            result.confidence,
        )
        return result
