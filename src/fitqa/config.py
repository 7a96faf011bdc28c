"""Runtime configuration for the classifier, storage and CLI entry points."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Mapping

from fitqa.classification.lemmatizer import available_lemmatizers
from fitqa.classification.similarity import DEFAULT_MIN_FUZZY_LENGTH


DEFAULT_DB_PATH = ".fitqa.db"
DEFAULT_LEMMATIZER = "none"
DEFAULT_MAX_QUESTION_CHARS = 2000
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class FitqaSettings:
    """Validated runtime settings."""

    db_path: Path = Path(DEFAULT_DB_PATH)
    lemmatizer: str = DEFAULT_LEMMATIZER
    min_fuzzy_length: int = DEFAULT_MIN_FUZZY_LENGTH
    max_question_chars: int = DEFAULT_MAX_QUESTION_CHARS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FitqaSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        db_path_raw = source.get("FITQA_DB_PATH", DEFAULT_DB_PATH).strip()
        if not db_path_raw:
            raise ValueError("FITQA_DB_PATH cannot be empty")

        lemmatizer = source.get("FITQA_LEMMATIZER", DEFAULT_LEMMATIZER).strip().lower()
        if lemmatizer not in available_lemmatizers():
            supported = ", ".join(available_lemmatizers())
            raise ValueError(f"FITQA_LEMMATIZER must be one of: {supported}")

        min_fuzzy_length = _parse_positive_int(
            name="FITQA_MIN_FUZZY_LENGTH",
            raw_value=source.get("FITQA_MIN_FUZZY_LENGTH", str(DEFAULT_MIN_FUZZY_LENGTH)).strip(),
            minimum=1,
        )
        max_question_chars = _parse_positive_int(
            name="FITQA_MAX_QUESTION_CHARS",
            raw_value=source.get("FITQA_MAX_QUESTION_CHARS", str(DEFAULT_MAX_QUESTION_CHARS)).strip(),
            minimum=3,
        )

        log_level = source.get("FITQA_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"FITQA_LOG_LEVEL is not a valid logging level: {log_level}")

        return cls(
            db_path=Path(db_path_raw),
            lemmatizer=lemmatizer,
            min_fuzzy_length=min_fuzzy_length,
            max_question_chars=max_question_chars,
            log_level=log_level,
        )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(format=LOG_FORMAT, level=level)
