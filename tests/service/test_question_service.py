from __future__ import annotations

from pathlib import Path

import pytest

from fitqa.classification.classifier import QuestionClassifier
from fitqa.classification.errors import InvalidInputError
from fitqa.classification.lexicon import Category, CategoryLexicon
from fitqa.service.question_service import QuestionService
from fitqa.stats.repository import QuestionRepository, UnknownCategoryError


@pytest.fixture(scope="module")
def classifier() -> QuestionClassifier:
    return QuestionClassifier()


@pytest.fixture()
def repository(tmp_path: Path):
    with QuestionRepository(tmp_path / "fitqa.db") as repo:
        repo.seed_categories()
        yield repo


def test_ask_classifies_stores_and_returns_stats(
    classifier: QuestionClassifier,
    repository: QuestionRepository,
) -> None:
    service = QuestionService(classifier, repository)

    response = service.ask(10, "¿Qué debo comer antes de correr?")

    assert response.category == "nutricion"
    assert response.confidence == pytest.approx(72.73)
    assert response.user_stats.counts["nutricion"] == 1
    assert response.user_stats.total_questions == 1
    assert response.user_stats.weighted_score == 2.0
    assert response.classification.category == response.category
    assert response.timestamp

    stored = repository.connection.execute("SELECT user_id, question FROM questions").fetchall()
    assert [(row["user_id"], row["question"]) for row in stored] == [(10, "¿Qué debo comer antes de correr?")]


def test_ask_accumulates_weighted_score(classifier: QuestionClassifier, repository: QuestionRepository) -> None:
    service = QuestionService(classifier, repository)

    service.ask(3, "¿Qué zapatillas debo usar?")
    response = service.ask(3, "Hola, ¿cómo estás?")

    assert response.category == "entrenamiento"
    assert response.user_stats.counts["equipamiento"] == 1
    assert response.user_stats.counts["entrenamiento"] == 1
    assert response.user_stats.weighted_score == 4.0


def test_ask_response_to_dict_omits_classification_details(
    classifier: QuestionClassifier,
    repository: QuestionRepository,
) -> None:
    payload = QuestionService(classifier, repository).ask(1, "¿Qué zapatillas debo usar?").to_dict()

    assert set(payload) == {"category", "confidence", "user_stats", "timestamp"}
    assert payload["user_stats"]["user_id"] == 1


@pytest.mark.parametrize(
    ("user_id", "question", "message"),
    [
        (1, "ab", "at least 3 characters"),
        (0, "¿Qué debo comer?", "user_id"),
        (1, "x" * 51, "cannot exceed 50 characters"),
    ],
)
def test_ask_rejects_invalid_input_without_storing(
    classifier: QuestionClassifier,
    repository: QuestionRepository,
    user_id: int,
    question: str,
    message: str,
) -> None:
    service = QuestionService(classifier, repository, max_question_chars=50)

    with pytest.raises(InvalidInputError, match=message):
        service.ask(user_id, question)

    assert repository.connection.execute("SELECT COUNT(*) FROM questions").fetchone()[0] == 0


def test_ask_propagates_storage_errors(classifier: QuestionClassifier, tmp_path: Path) -> None:
    with QuestionRepository(tmp_path / "unseeded.db") as repository:
        service = QuestionService(classifier, repository)

        with pytest.raises(UnknownCategoryError):
            service.ask(1, "¿Qué debo comer?")


def test_service_requires_matching_weights(repository: QuestionRepository) -> None:
    other = CategoryLexicon(
        [
            Category("nutricion", "Nutrición", 5, ("comer",)),
            Category("entrenamiento", "Entrenamiento", 1, ("correr",)),
        ],
        default_category="entrenamiento",
        expected_count=None,
    )

    with pytest.raises(ValueError, match="weights"):
        QuestionService(QuestionClassifier(other), repository)
