"""Question text normalization and tokenization."""

from __future__ import annotations

import re
import unicodedata

from fitqa.classification.errors import InvalidInputError
from fitqa.classification.lemmatizer import Lemmatizer


# Anything outside digits, basic Latin and Spanish accented letters.
_DISALLOWED_RE = re.compile(r"[^0-9a-záéíóúñü\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def _require_text(text: object) -> str:
    if not isinstance(text, str) or not text:
        raise InvalidInputError("text must be a non-empty string")
    return text


def normalize_text(text: str) -> str:
    """Compose accents, lowercase *text*, blank out punctuation and collapse whitespace."""
    value = unicodedata.normalize("NFKC", _require_text(text)).lower()
    value = _DISALLOWED_RE.sub(" ", value)
    return _WHITESPACE_RE.sub(" ", value).strip()


def tokenize(normalized: str) -> list[str]:
    return normalized.split(" ") if normalized else []


def lemmatize_tokens(tokens: list[str], lemmatizer: Lemmatizer | None) -> list[str]:
    if lemmatizer is None:
        return list(tokens)

    lemmas: list[str] = []
    for token in tokens:
        lemma = lemmatizer.lemmatize(token)
        lemmas.append(lemma or token)
    return lemmas


def preprocess(text: str, lemmatizer: Lemmatizer | None = None) -> list[str]:
    """Return the ordered token sequence for *text*.

    Duplicate tokens are kept. Tokens the lemmatizer has no lemma for are
    returned as normalized.
    """
    return lemmatize_tokens(tokenize(normalize_text(text)), lemmatizer)
