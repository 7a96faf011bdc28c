"""Strong-word boost applied after every category has been scored."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace

from fitqa.classification.lexicon import Category, CategoryLexicon
from fitqa.classification.similarity import (
    DEFAULT_MAX_EDIT_DISTANCE,
    DEFAULT_MIN_FUZZY_LENGTH,
    CategoryScore,
    is_fuzzy_match,
)


STRONG_WORD_MULTIPLIER = 2.0


def find_strong_word(
    category: Category,
    normalized_text: str,
    tokens: Sequence[str],
    *,
    max_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    min_fuzzy_length: int = DEFAULT_MIN_FUZZY_LENGTH,
) -> str | None:
    """Return the first strong word of *category* present in the question."""
    for word in category.strong_words:
        if word in normalized_text:
            return word
        if any(
            is_fuzzy_match(token, word, max_distance=max_distance, min_length=min_fuzzy_length)
            for token in tokens
        ):
            return word
    return None


def boost_scores(
    scores: Mapping[str, CategoryScore],
    lexicon: CategoryLexicon,
    normalized_text: str,
    tokens: Sequence[str],
    *,
    max_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    min_fuzzy_length: int = DEFAULT_MIN_FUZZY_LENGTH,
) -> dict[str, CategoryScore]:
    """Return a new score map with strong-word categories doubled.

    Categories without any matched token keep their score even when a strong
    word is present.
    """
    boosted: dict[str, CategoryScore] = {}
    for name, score in scores.items():
        if score.match_count == 0:
            boosted[name] = score
            continue

        hit = find_strong_word(
            lexicon.get(name),
            normalized_text,
            tokens,
            max_distance=max_distance,
            min_fuzzy_length=min_fuzzy_length,
        )
        if hit is None:
            boosted[name] = score
        else:
            boosted[name] = replace(score, score=score.score * STRONG_WORD_MULTIPLIER, boosted=True)
    return boosted
