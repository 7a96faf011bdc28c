"""Pluggable lemmatization backends for question tokens."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Protocol


SNOWBALL_LANGUAGE = "spanish"

# Question words, greetings, articles, pronouns, prepositions and common
# auxiliary verb forms.
SPANISH_STOPWORDS = frozenset(
    {
        "qué", "que", "cómo", "como", "cuál", "cuáles", "cuándo", "cuando",
        "cuánto", "cuánta", "cuántos", "cuántas", "dónde", "donde", "quién",
        "quiénes", "por", "porque", "hola", "buenas", "buenos", "gracias",
        "el", "la", "los", "las", "lo", "un", "una", "unos", "unas", "de",
        "del", "al", "a", "en", "con", "para", "sin", "sobre", "entre", "hasta",
        "desde", "y", "e", "o", "u", "ni", "pero", "si", "sí", "no", "muy",
        "más", "menos", "mi", "mis", "tu", "tus", "su", "sus", "yo", "tú",
        "me", "te", "se", "le", "les", "nos", "es", "son", "soy", "eres",
        "ser", "era", "está", "están", "estás", "estoy", "estar", "hay",
        "debo", "debe", "debería", "puedo", "puede", "quiero", "tengo", "tiene",
        "este", "esta", "esto", "estos", "estas", "ese", "esa", "eso",
    }
)


class Lemmatizer(Protocol):
    def lemmatize(self, token: str) -> str | None:
        """Return the base form of *token*, or ``None`` when unknown."""


class NullLemmatizer:
    """Leaves every token unchanged."""

    def lemmatize(self, token: str) -> str | None:
        return None


class DictionaryLemmatizer:
    """Looks tokens up in an explicit ``form -> lemma`` table."""

    def __init__(self, lemmas: Mapping[str, str]) -> None:
        self._lemmas = {form.lower(): lemma.lower() for form, lemma in lemmas.items()}

    def lemmatize(self, token: str) -> str | None:
        return self._lemmas.get(token)


@lru_cache(maxsize=1)
def _get_stemmer():
    from nltk.stem.snowball import SnowballStemmer

    return SnowballStemmer(SNOWBALL_LANGUAGE)


class SnowballLemmatizer:
    """Reduces Spanish word forms to a shared stem with NLTK's Snowball stemmer.

    Stems are coarser than dictionary lemmas: "cómo" and "comer" both reduce
    to "com". Function words listed in ``stopwords`` are therefore left as
    they are, so question words and greetings never collide with topic
    keywords. The stemmer does not need any downloaded corpora and is built
    lazily on first use.
    """

    def __init__(self, stopwords: Iterable[str] = SPANISH_STOPWORDS) -> None:
        self._stopwords = frozenset(word.lower() for word in stopwords)

    def lemmatize(self, token: str) -> str | None:
        if token in self._stopwords:
            return None
        stem = _get_stemmer().stem(token)
        return stem or None


_LEMMATIZERS = {
    "none": NullLemmatizer,
    "snowball": SnowballLemmatizer,
}


def available_lemmatizers() -> tuple[str, ...]:
    return tuple(_LEMMATIZERS)


def build_lemmatizer(name: str) -> Lemmatizer:
    """Return a lemmatizer by its configuration name (``none`` or ``snowball``)."""
    key = name.strip().lower()
    try:
        factory = _LEMMATIZERS[key]
    except KeyError:
        supported = ", ".join(_LEMMATIZERS)
        raise ValueError(f"Unknown lemmatizer '{name}'. Supported: {supported}") from None
    return factory()
