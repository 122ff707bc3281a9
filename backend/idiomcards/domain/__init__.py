# Domain layer - Business logic (no framework dependencies)

from .entities import Card, Deck, ReviewSession
from .value_objects import (
    ExtractionRecord,
    InvalidDecisionError,
    ReviewDecision,
    SessionState,
)

__all__ = [
    "Card",
    "Deck",
    "ExtractionRecord",
    "InvalidDecisionError",
    "ReviewDecision",
    "ReviewSession",
    "SessionState",
]
