"""Input validation for incoming user questions."""

from __future__ import annotations


MIN_QUESTION_CHARS = 3


def validate_question_input(question: object, user_id: object, *, max_chars: int) -> list[str]:
    """Return human-readable validation errors; an empty list means valid."""
    errors: list[str] = []

    if not isinstance(question, str):
        errors.append("question must be a string")
    else:
        stripped = question.strip()
        if len(stripped) < MIN_QUESTION_CHARS:
            errors.append(f"question must have at least {MIN_QUESTION_CHARS} characters")
        elif len(question) > max_chars:
            errors.append(f"question cannot exceed {max_chars} characters")

    if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id < 1:
        errors.append("user_id must be a positive integer")

    return errors
