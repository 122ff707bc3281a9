"""Deck entity - a named, ordered collection of cards."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TypedDict

from idiomcards.domain.entities.card import Card, CardDict, parse_instant, to_utc


class DeckDict(TypedDict):
    """Persisted deck record."""

    id: str
    title: str
    cards: list[CardDict]
    createdAt: str


class CardNotFoundError(Exception):
    """Raised when a card id is not part of the deck."""

    def __init__(self, deck_id: str, card_id: str):
        self.deck_id = deck_id
        self.card_id = card_id
        super().__init__(f"Card {card_id} not found in deck {deck_id}")


@dataclass
class Deck:
    """Deck entity.

    Identity is the storage id. Cards are replaced by id, never by
    position, so edits and review grades cannot land on the wrong card.

    Attributes:
        id: Storage identifier
        title: User-editable title
        cards: Ordered cards
        created_at: When the deck was created
    """

    id: str
    title: str
    cards: list[Card] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def find_card(self, card_id: str) -> Card | None:
        """Get a card by id, or None."""
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def replace_card(self, card: Card) -> Card:
        """Replace the card that has the same id.

        Returns:
            The card that was replaced

        Raises:
            CardNotFoundError: If no card has that id
        """
        for index, existing in enumerate(self.cards):
            if existing.id == card.id:
                self.cards[index] = card
                return existing
        raise CardNotFoundError(self.id, card.id)

    def matches(self, query: str) -> bool:
        """Case-insensitive match on the title or any card term."""
        if not query:
            return True
        needle = query.lower()
        return needle in self.title.lower() or any(
            needle in card.term.lower() for card in self.cards
        )

    def to_dict(self) -> DeckDict:
        """Convert deck to its persisted record shape."""
        return {
            "id": self.id,
            "title": self.title,
            "cards": [card.to_dict() for card in self.cards],
            "createdAt": to_utc(self.created_at).isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Deck":
        """Rebuild a deck from a persisted record."""
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            cards=[Card.from_dict(c) for c in data.get("cards") or []],
            created_at=parse_instant(data["createdAt"]),
        )
