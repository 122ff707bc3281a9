"""Deck statistics value objects."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LevelCount:
    """Number of cards sitting at one review level across all decks."""

    level: int
    count: int

    @property
    def label(self) -> str:
        return f"等级 {self.level}"


@dataclass(frozen=True)
class DeckSummary:
    """Immutable overview of a deck for listings."""

    id: str
    title: str
    card_count: int
    due_count: int
    created_at: datetime

    @property
    def has_due_cards(self) -> bool:
        """Whether a review session can start for this deck."""
        return self.due_count > 0
