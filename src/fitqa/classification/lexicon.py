"""Static category lexicon: keywords, strong-signal words and weights."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from functools import lru_cache
import json
from pathlib import Path
from typing import Any
import unicodedata

from fitqa.classification.lemmatizer import Lemmatizer


_LEXICON_PATH = Path(__file__).parent / "lexicon.json"
CATEGORY_COUNT = 5
DEFAULT_CATEGORY = "entrenamiento"


@dataclass(frozen=True, slots=True)
class Category:
    name: str
    label: str
    weight: int
    keywords: tuple[str, ...]
    strong_words: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, str | int]:
        return {"name": self.name, "label": self.label, "weight": self.weight}


def _lemmatize_phrase(phrase: str, lemmatizer: Lemmatizer) -> str:
    words = []
    for word in phrase.split():
        lemma = lemmatizer.lemmatize(word)
        words.append(lemma or word)
    return " ".join(words)


def _normalize_entry(value: object) -> str:
    return unicodedata.normalize("NFKC", str(value).strip()).lower()


def _parse_category(raw: Mapping[str, Any]) -> Category:
    name = str(raw.get("name", "")).strip()
    if not name:
        raise ValueError("category name cannot be empty")

    weight = raw.get("weight")
    if isinstance(weight, bool) or not isinstance(weight, int) or weight < 1:
        raise ValueError(f"category '{name}' weight must be a positive integer")

    keywords = tuple(_normalize_entry(kw) for kw in raw.get("keywords") or () if str(kw).strip())
    if not keywords:
        raise ValueError(f"category '{name}' must define at least one keyword")

    strong_words = tuple(
        _normalize_entry(word) for word in raw.get("strong_words") or () if str(word).strip()
    )
    label = str(raw.get("label") or name).strip()
    return Category(name=name, label=label, weight=weight, keywords=keywords, strong_words=strong_words)


class CategoryLexicon:
    """Read-only set of categories, iterated in definition order.

    Instances are never mutated after construction, so one lexicon can be
    shared by any number of concurrent classifications.
    """

    __slots__ = ("_categories", "_default_category")

    def __init__(
        self,
        categories: tuple[Category, ...] | list[Category],
        *,
        default_category: str = DEFAULT_CATEGORY,
        expected_count: int | None = CATEGORY_COUNT,
    ) -> None:
        by_name: dict[str, Category] = {}
        for category in categories:
            if category.name in by_name:
                raise ValueError(f"duplicate category name: {category.name}")
            by_name[category.name] = category

        if expected_count is not None and len(by_name) != expected_count:
            raise ValueError(f"lexicon must define exactly {expected_count} categories, got {len(by_name)}")
        if default_category not in by_name:
            raise ValueError(f"default category '{default_category}' is not defined")

        self._categories = by_name
        self._default_category = default_category

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], *, expected_count: int | None = CATEGORY_COUNT) -> "CategoryLexicon":
        raw_categories = payload.get("categories")
        if not isinstance(raw_categories, list):
            raise ValueError("lexicon payload must contain a 'categories' list")

        categories = [_parse_category(raw) for raw in raw_categories]
        default_category = str(payload.get("default_category") or DEFAULT_CATEGORY)
        return cls(categories, default_category=default_category, expected_count=expected_count)

    @classmethod
    def from_path(cls, path: str | Path, *, expected_count: int | None = CATEGORY_COUNT) -> "CategoryLexicon":
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_dict(payload, expected_count=expected_count)

    @property
    def default_category(self) -> str:
        return self._default_category

    def categories(self) -> tuple[Category, ...]:
        return tuple(self._categories.values())

    def names(self) -> tuple[str, ...]:
        return tuple(self._categories)

    def get(self, name: str) -> Category:
        try:
            return self._categories[name]
        except KeyError:
            raise KeyError(f"unknown category: {name}") from None

    def weights(self) -> dict[str, int]:
        return {name: category.weight for name, category in self._categories.items()}

    def lemmatized(self, lemmatizer: Lemmatizer) -> "CategoryLexicon":
        """Return a copy whose keywords are reduced to lemmas by *lemmatizer*."""
        categories = [
            replace(
                category,
                keywords=tuple(dict.fromkeys(_lemmatize_phrase(kw, lemmatizer) for kw in category.keywords)),
            )
            for category in self._categories.values()
        ]
        return CategoryLexicon(categories, default_category=self._default_category, expected_count=None)

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)


@lru_cache(maxsize=1)
def load_default_lexicon() -> CategoryLexicon:
    """Load the bundled fitness lexicon once per process."""
    return CategoryLexicon.from_path(_LEXICON_PATH)
