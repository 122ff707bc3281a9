"""API routes module."""

from .assistant import router as assistant_router
from .decks import router as decks_router
from .notes import router as notes_router
from .review import router as review_router

__all__ = ["notes_router", "decks_router", "review_router", "assistant_router"]
