"""Domain value objects - immutable objects without identity."""

from .deck_stats import DeckSummary, LevelCount
from .extraction_record import ExtractionRecord
from .review_decision import InvalidDecisionError, ReviewDecision
from .session_state import SessionState

__all__ = [
    "DeckSummary",
    "ExtractionRecord",
    "InvalidDecisionError",
    "LevelCount",
    "ReviewDecision",
    "SessionState",
]
