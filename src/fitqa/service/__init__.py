"""Orchestration of classification, storage and statistics."""

from .question_service import AskResponse, QuestionService
from .validation import validate_question_input

__all__ = ["AskResponse", "QuestionService", "validate_question_input"]
