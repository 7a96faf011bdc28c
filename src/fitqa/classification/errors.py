"""Domain errors raised by the question classification pipeline."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidInputError(ValueError):
    """Raised when the question text is missing, empty or not a string."""


@dataclass(slots=True)
class ClassificationError(RuntimeError):
    """Domain error raised when a pipeline stage fails on valid input."""

    stage: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (stage={self.stage})"


class ClassificationTimeoutError(ClassificationError):
    """Raised when the caller-supplied deadline expires mid-classification."""
