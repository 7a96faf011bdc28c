"""Per-category lexical scoring with exact and fuzzy keyword matches."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz.distance import Levenshtein

from fitqa.classification.lexicon import Category


DEFAULT_MAX_EDIT_DISTANCE = 2
DEFAULT_MIN_FUZZY_LENGTH = 6
EXACT_MATCH_SCORE = 1.0
FUZZY_MATCH_SCORE = 0.7


@dataclass(frozen=True, slots=True)
class CategoryScore:
    category: str
    match_count: int
    total_tokens: int
    score: float
    total_score: float = 0.0
    exact_matches: int = 0
    fuzzy_matches: int = 0
    boosted: bool = False

    @property
    def match_ratio(self) -> float:
        if self.total_tokens == 0:
            return 0.0
        return self.match_count / self.total_tokens

    def to_dict(self) -> dict[str, str | int | float | bool]:
        return {
            "category": self.category,
            "score": self.score,
            "match_count": self.match_count,
            "total_tokens": self.total_tokens,
            "match_ratio": self.match_ratio,
            "total_score": self.total_score,
            "exact_matches": self.exact_matches,
            "fuzzy_matches": self.fuzzy_matches,
            "boosted": self.boosted,
        }


def is_fuzzy_match(
    token: str,
    keyword: str,
    *,
    max_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    min_length: int = DEFAULT_MIN_FUZZY_LENGTH,
) -> bool:
    """Return True when both strings are long enough and within *max_distance* edits."""
    if len(token) < min_length or len(keyword) < min_length:
        return False
    return Levenshtein.distance(token, keyword, score_cutoff=max_distance) <= max_distance


def find_fuzzy_keyword(
    token: str,
    keywords: Sequence[str],
    *,
    max_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    min_length: int = DEFAULT_MIN_FUZZY_LENGTH,
) -> str | None:
    """Return the first keyword (in lexicon order) close enough to *token*."""
    for keyword in keywords:
        if is_fuzzy_match(token, keyword, max_distance=max_distance, min_length=min_length):
            return keyword
    return None


def score_category(
    tokens: Sequence[str],
    category: Category,
    *,
    max_distance: int = DEFAULT_MAX_EDIT_DISTANCE,
    min_fuzzy_length: int = DEFAULT_MIN_FUZZY_LENGTH,
) -> CategoryScore:
    """Score *tokens* against one category.

    Each token counts once as a match, exact or fuzzy. The weighted score is
    the share of matched tokens (in percent) times the category weight. A
    token may also count towards other categories.
    """
    keyword_set = frozenset(category.keywords)
    exact = 0
    fuzzy = 0
    total_score = 0.0

    for token in tokens:
        if token in keyword_set:
            exact += 1
            total_score += EXACT_MATCH_SCORE
            continue

        match = find_fuzzy_keyword(
            token,
            category.keywords,
            max_distance=max_distance,
            min_length=min_fuzzy_length,
        )
        if match is not None:
            fuzzy += 1
            total_score += FUZZY_MATCH_SCORE

    total_tokens = len(tokens)
    match_count = exact + fuzzy
    base_score = (match_count / total_tokens) * 100 if total_tokens else 0.0

    return CategoryScore(
        category=category.name,
        match_count=match_count,
        total_tokens=total_tokens,
        score=base_score * category.weight,
        total_score=total_score,
        exact_matches=exact,
        fuzzy_matches=fuzzy,
    )
