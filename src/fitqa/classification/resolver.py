"""Final category selection, confidence and low-confidence fallback."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import logging

from fitqa.classification.lexicon import CategoryLexicon
from fitqa.classification.similarity import CategoryScore


MIN_CONFIDENCE = 20.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    category: str
    confidence: float
    scores: Mapping[str, CategoryScore]
    processed_tokens: tuple[str, ...]
    original_text: str
    processed_text: str = ""
    nominal_category: str | None = None
    used_fallback: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "category": self.category,
            "confidence": self.confidence,
            "used_fallback": self.used_fallback,
            "scores": {name: score.to_dict() for name, score in self.scores.items()},
            "processed_tokens": list(self.processed_tokens),
            "processed_text": self.processed_text,
            "original_text": self.original_text,
        }


def pick_best_category(scores: Mapping[str, CategoryScore], order: Sequence[str]) -> tuple[str | None, float]:
    """Return the leading category and its score.

    A later category replaces the leader when its score is strictly higher,
    or equal with strictly more matched tokens.
    """
    best: str | None = None
    max_score = 0.0
    best_match_count = 0

    for name in order:
        current = scores[name]
        if current.score > max_score or (
            current.score == max_score and current.match_count > best_match_count
        ):
            best = name
            max_score = current.score
            best_match_count = current.match_count

    return best, max_score


def compute_confidence(scores: Mapping[str, CategoryScore], max_score: float) -> float:
    total = sum(score.score for score in scores.values())
    if total <= 0:
        return 0.0
    return min(100.0, max(0.0, (max_score / total) * 100))


def resolve_scores(
    scores: Mapping[str, CategoryScore],
    lexicon: CategoryLexicon,
    *,
    original_text: str,
    tokens: Sequence[str],
    processed_text: str = "",
    min_confidence: float = MIN_CONFIDENCE,
) -> ClassificationResult:
    order = [name for name in lexicon.names() if name in scores]
    nominal, max_score = pick_best_category(scores, order)
    confidence = compute_confidence(scores, max_score)

    category = nominal
    used_fallback = False
    if nominal is None or confidence < min_confidence:
        category = lexicon.default_category
        used_fallback = True
        logger.info(
            "Low confidence (%.2f%%), using default category %s",
            confidence,
            category,
        )

    return ClassificationResult(
        category=category,
        confidence=round(confidence, 2),
        scores=dict(scores),
        processed_tokens=tuple(tokens),
        original_text=original_text,
        processed_text=processed_text,
        nominal_category=nominal,
        used_fallback=used_fallback,
    )
