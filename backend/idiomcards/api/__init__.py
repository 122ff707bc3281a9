"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    DeckLibraryDep,
    ExampleAssistantDep,
    NowDep,
    ReviewManagerDep,
    cleanup_dependencies,
    get_clock,
    get_deck_library,
    get_example_assistant,
    get_review_manager,
    init_dependencies,
)
from .routes import assistant_router, decks_router, notes_router, review_router

__all__ = [
    # Routes
    "notes_router",
    "decks_router",
    "review_router",
    "assistant_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "get_clock",
    "get_deck_library",
    "get_review_manager",
    "get_example_assistant",
    # Type aliases
    "NowDep",
    "DeckLibraryDep",
    "ReviewManagerDep",
    "ExampleAssistantDep",
]
