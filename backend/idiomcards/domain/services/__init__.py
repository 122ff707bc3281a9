"""Domain services - orchestration and business logic."""

from .deck_library import (
    DeckLibrary,
    EmptyDeckError,
    InvalidCardError,
    PreviewResult,
    build_preview,
    count_levels,
    detect_title,
)
from .example_assistant import ExampleAssistant, build_example_prompt
from .note_extractor import extract
from .review_manager import (
    AnswerResult,
    NoActiveSessionError,
    ReviewManager,
    StartReviewResult,
)
from .scheduler import clamp_level, due_cards, grade, interval_for, is_due, shuffle_queue

__all__ = [
    "extract",
    "grade",
    "due_cards",
    "is_due",
    "clamp_level",
    "interval_for",
    "shuffle_queue",
    "DeckLibrary",
    "EmptyDeckError",
    "InvalidCardError",
    "PreviewResult",
    "build_preview",
    "count_levels",
    "detect_title",
    "ExampleAssistant",
    "build_example_prompt",
    "ReviewManager",
    "NoActiveSessionError",
    "StartReviewResult",
    "AnswerResult",
]
