"""Weighted activity score over per-category question counts."""

from __future__ import annotations

from collections.abc import Mapping

from fitqa.classification.lexicon import CategoryLexicon


def weighted_score(counts: Mapping[str, int], lexicon: CategoryLexicon) -> float:
    """Sum ``count * weight`` over the lexicon's categories, rounded to 2 decimals.

    Weights are read from the same lexicon the classifier uses. Counts for
    names outside the lexicon are ignored.
    """
    total = 0.0
    for name, weight in lexicon.weights().items():
        count = counts.get(name, 0)
        if count < 0:
            raise ValueError(f"question count for '{name}' cannot be negative")
        total += count * weight
    return round(total, 2)
