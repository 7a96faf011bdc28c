"""CLI entrypoint for classifying a fitness question (and optionally storing it)."""

from __future__ import annotations

import argparse
import json
import logging

from dotenv import load_dotenv

load_dotenv()

from fitqa.classification.classifier import QuestionClassifier
from fitqa.classification.errors import ClassificationError, InvalidInputError
from fitqa.classification.lemmatizer import available_lemmatizers, build_lemmatizer
from fitqa.config import FitqaSettings, configure_logging
from fitqa.service.question_service import QuestionService
from fitqa.stats.repository import QuestionRepository


logger = logging.getLogger(__name__)


def _print_error(error: str, message: str) -> None:
    print(json.dumps({"success": False, "error": error, "message": message}, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    try:
        settings = FitqaSettings.from_env()
    except ValueError as error:
        _print_error("invalid configuration", str(error))
        return 1

    parser = argparse.ArgumentParser(description="Classify a question into a fitness topic category")
    parser.add_argument("--question", required=True, help="Question text to classify")
    parser.add_argument("--user-id", type=int, default=None, help="Store the question for this user and print stats")
    parser.add_argument("--db-path", default=str(settings.db_path), help="SQLite database path")
    parser.add_argument(
        "--lemmatizer",
        choices=available_lemmatizers(),
        default=settings.lemmatizer,
        help="Lemmatization backend applied to tokens and keywords",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        classifier = QuestionClassifier(
            lemmatizer=build_lemmatizer(args.lemmatizer),
            min_fuzzy_length=settings.min_fuzzy_length,
        )
    except ImportError as error:
        logger.error("Lemmatizer %s is unavailable: %s", args.lemmatizer, error)
        _print_error("lemmatizer unavailable", str(error))
        return 1

    try:
        if args.user_id is None:
            payload = classifier.classify(args.question).to_dict()
        else:
            with QuestionRepository(args.db_path, classifier.lexicon) as repository:
                repository.seed_categories()
                service = QuestionService(
                    classifier,
                    repository,
                    max_question_chars=settings.max_question_chars,
                )
                response = service.ask(args.user_id, args.question)
            payload = response.to_dict()
            payload["classification"] = response.classification.to_dict()
    except InvalidInputError as error:
        print(json.dumps({"success": False, "error": "invalid input", "details": str(error)}, ensure_ascii=False))
        return 2
    except ClassificationError as error:
        logger.error("Classification failed: %s", error)
        _print_error("classification failed", str(error))
        return 1

    print(json.dumps({"success": True, **payload}, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
