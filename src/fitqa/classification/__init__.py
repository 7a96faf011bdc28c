"""Lexical question classification pipeline."""

from .classifier import QuestionClassifier
from .errors import ClassificationError, ClassificationTimeoutError, InvalidInputError
from .lemmatizer import DictionaryLemmatizer, Lemmatizer, NullLemmatizer, SnowballLemmatizer, build_lemmatizer
from .lexicon import Category, CategoryLexicon, load_default_lexicon
from .preprocess import normalize_text, preprocess
from .resolver import ClassificationResult
from .similarity import CategoryScore

__all__ = [
    "Category",
    "CategoryLexicon",
    "CategoryScore",
    "ClassificationError",
    "ClassificationResult",
    "ClassificationTimeoutError",
    "DictionaryLemmatizer",
    "InvalidInputError",
    "Lemmatizer",
    "NullLemmatizer",
    "QuestionClassifier",
    "SnowballLemmatizer",
    "build_lemmatizer",
    "load_default_lexicon",
    "normalize_text",
    "preprocess",
]
