"""End-to-end tests for the question classifier."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import time
import unicodedata

import pytest

from fitqa.classification.classifier import QuestionClassifier
from fitqa.classification.errors import (
    ClassificationError,
    ClassificationTimeoutError,
    InvalidInputError,
)
from fitqa.classification.lemmatizer import DictionaryLemmatizer
from fitqa.classification.lexicon import Category, CategoryLexicon


CATEGORY_NAMES = {"nutricion", "entrenamiento", "recuperacion", "prevencion", "equipamiento"}
SAMPLE_QUESTIONS = [
    "¿Qué debo comer antes de correr?",
    "¿Cómo debo entrenar para mejorar mi resistencia?",
    "¿Cómo puedo prevenir lesiones al correr?",
    "¿Qué zapatillas son mejores para correr?",
    "¿Cómo estirar después del ejercicio?",
    "Hola, ¿cómo estás?",
    "¿?",
]


@pytest.fixture(scope="module")
def classifier() -> QuestionClassifier:
    return QuestionClassifier()


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_nutrition_question(classifier: QuestionClassifier) -> None:
    question = "¿Qué debo comer antes de correr?"

    result = classifier.classify(question)

    assert result.category == "nutricion"
    assert result.confidence == pytest.approx(72.73)
    assert result.scores["nutricion"].boosted is True
    assert result.original_text == question
    assert result.processed_tokens == ("qué", "debo", "comer", "antes", "de", "correr")


def test_greeting_without_matches_falls_back_to_training(classifier: QuestionClassifier) -> None:
    result = classifier.classify("Hola, ¿cómo estás?")

    assert result.category == "entrenamiento"
    assert result.confidence == 0.0
    assert result.used_fallback is True
    assert all(score.match_count == 0 for score in result.scores.values())


def test_punctuation_only_question_has_zero_confidence(classifier: QuestionClassifier) -> None:
    result = classifier.classify("¿?¡!...")

    assert result.processed_tokens == ()
    assert result.category == "entrenamiento"
    assert result.confidence == 0.0
    assert all(score.total_tokens == 0 and score.score == 0.0 for score in result.scores.values())


def test_equipment_question_wins_despite_lowest_weight(classifier: QuestionClassifier) -> None:
    result = classifier.classify("¿Qué zapatillas son mejores para correr?")

    assert result.category == "equipamiento"
    assert result.confidence == pytest.approx(57.14)
    assert result.scores["equipamiento"].score > result.scores["entrenamiento"].score


def test_prevention_question(classifier: QuestionClassifier) -> None:
    result = classifier.classify("¿Cómo puedo prevenir lesiones al correr?")

    assert result.category == "prevencion"
    assert result.confidence > 0


def test_training_question_with_numbers(classifier: QuestionClassifier) -> None:
    result = classifier.classify("¿Cuántos kilómetros debo correr en 30 minutos?")

    assert result.category == "entrenamiento"
    assert result.confidence == 100.0


def test_long_repeated_question(classifier: QuestionClassifier) -> None:
    result = classifier.classify("¿Qué debo comer antes de correr? " * 50)

    assert result.category == "nutricion"
    assert result.confidence == pytest.approx(72.73)


def test_shared_token_scores_several_categories(classifier: QuestionClassifier) -> None:
    result = classifier.classify("¿Cómo estirar después del ejercicio?")

    assert result.scores["recuperacion"].match_count == 1
    assert result.scores["prevencion"].match_count == 1
    assert result.category == "recuperacion"


def test_decomposed_accents_match_accented_keywords(classifier: QuestionClassifier) -> None:
    composed = classifier.classify("Quiero más proteína")
    decomposed = classifier.classify(unicodedata.normalize("NFD", "Quiero más proteína"))

    assert composed.category == "nutricion"
    assert decomposed.category == "nutricion"
    assert decomposed.confidence == composed.confidence
    assert decomposed.processed_tokens == composed.processed_tokens


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("question", SAMPLE_QUESTIONS)
def test_category_is_known_and_confidence_bounded(classifier: QuestionClassifier, question: str) -> None:
    result = classifier.classify(question)

    assert result.category in CATEGORY_NAMES
    assert 0.0 <= result.confidence <= 100.0
    assert set(result.scores) == CATEGORY_NAMES


@pytest.mark.parametrize("question", SAMPLE_QUESTIONS)
def test_classification_is_idempotent(classifier: QuestionClassifier, question: str) -> None:
    assert classifier.classify(question) == classifier.classify(question)


@pytest.mark.parametrize("question", SAMPLE_QUESTIONS)
def test_low_confidence_always_means_default_category(classifier: QuestionClassifier, question: str) -> None:
    result = classifier.classify(question)

    if result.confidence < 20:
        assert result.category == "entrenamiento"


def test_concurrent_calls_share_one_classifier(classifier: QuestionClassifier) -> None:
    expected = [classifier.classify(question) for question in SAMPLE_QUESTIONS]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(classifier.classify, SAMPLE_QUESTIONS * 3))

    assert results == expected * 3


# ---------------------------------------------------------------------------
# Errors, lemmatization and custom lexicons
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value", ["", None, 17])
def test_invalid_input_is_not_wrapped(classifier: QuestionClassifier, value: object) -> None:
    with pytest.raises(InvalidInputError):
        classifier.classify(value)  # type: ignore[arg-type]


def test_expired_deadline_aborts_classification(classifier: QuestionClassifier) -> None:
    with pytest.raises(ClassificationTimeoutError) as exc_info:
        classifier.classify("¿Qué debo comer?", deadline=time.monotonic() - 1)

    assert isinstance(exc_info.value, ClassificationError)
    assert exc_info.value.stage == "preprocess"


def test_future_deadline_does_not_interfere(classifier: QuestionClassifier) -> None:
    result = classifier.classify("¿Qué debo comer?", deadline=time.monotonic() + 60)

    assert result.category == "nutricion"


class _ExplodingLemmatizer:
    def lemmatize(self, token: str) -> str | None:
        if token == "explota":
            raise RuntimeError("morphology backend crashed")
        return None


def test_lemmatizer_failure_is_wrapped_in_classification_error() -> None:
    classifier = QuestionClassifier(lemmatizer=_ExplodingLemmatizer())

    with pytest.raises(ClassificationError, match="morphology backend crashed") as exc_info:
        classifier.classify("todo explota")

    assert exc_info.value.stage == "preprocess"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_dictionary_lemmatizer_maps_inflected_forms_to_keywords() -> None:
    classifier = QuestionClassifier(lemmatizer=DictionaryLemmatizer({"comí": "comer"}))

    result = classifier.classify("¿Qué comí ayer?")

    assert result.processed_tokens == ("qué", "comer", "ayer")
    assert result.category == "nutricion"
    assert result.confidence == 100.0


def test_custom_lexicon_is_isolated_from_default() -> None:
    lexicon = CategoryLexicon(
        [
            Category("natacion", "Natación", 1, ("nadar", "piscina")),
            Category("ciclismo", "Ciclismo", 1, ("bicicleta", "pedalear")),
        ],
        default_category="ciclismo",
        expected_count=None,
    )
    custom = QuestionClassifier(lexicon)

    result = custom.classify("Quiero nadar en la piscina")

    assert result.category == "natacion"
    assert set(result.scores) == {"natacion", "ciclismo"}
    assert custom.classify("Hola").category == "ciclismo"


def test_list_categories_exposes_names_and_weights(classifier: QuestionClassifier) -> None:
    categories = classifier.list_categories()

    assert [(c["name"], c["weight"]) for c in categories] == [
        ("nutricion", 2),
        ("entrenamiento", 3),
        ("recuperacion", 2),
        ("prevencion", 2),
        ("equipamiento", 1),
    ]


def test_invalid_fuzzy_parameters_are_rejected() -> None:
    with pytest.raises(ValueError, match="min_fuzzy_length"):
        QuestionClassifier(min_fuzzy_length=0)
    with pytest.raises(ValueError, match="max_edit_distance"):
        QuestionClassifier(max_edit_distance=-1)
