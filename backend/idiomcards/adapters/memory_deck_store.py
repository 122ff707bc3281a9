"""In-memory deck store for development and testing.

Use DECK_STORE=memory to enable. Nothing survives a restart.
"""

import copy
from datetime import UTC, datetime
from uuid import uuid4

from idiomcards.domain.entities.card import Card
from idiomcards.domain.entities.deck import Deck
from idiomcards.ports.deck_repository import DeckNotFoundError


class InMemoryDeckStore:
    """DeckRepository implementation holding decks in a dict.

    Returns copies so callers can't mutate stored state without going
    through update_deck, the same contract a real document store has.

    This adapter is useful for:
    - Development without a database file
    - API tests
    """

    def __init__(self, decks: list[Deck] | None = None) -> None:
        self._decks: dict[str, Deck] = {d.id: copy.deepcopy(d) for d in decks or []}

    async def list_decks(self) -> list[Deck]:
        """Get all decks, newest first."""
        decks = sorted(self._decks.values(), key=lambda d: d.created_at, reverse=True)
        return [copy.deepcopy(d) for d in decks]

    async def get_deck(self, deck_id: str) -> Deck:
        """Get one deck by id."""
        deck = self._decks.get(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        return copy.deepcopy(deck)

    async def create_deck(self, title: str, cards: list[Card]) -> Deck:
        """Create a deck with a new id and creation instant."""
        deck = Deck(id=uuid4().hex, title=title, cards=list(cards), created_at=datetime.now(UTC))
        self._decks[deck.id] = deck
        return copy.deepcopy(deck)

    async def update_deck(
        self,
        deck_id: str,
        title: str | None = None,
        cards: list[Card] | None = None,
    ) -> Deck:
        """Replace the title and/or cards of a deck."""
        deck = self._decks.get(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        if title is not None:
            deck.title = title
        if cards is not None:
            deck.cards = list(cards)
        return copy.deepcopy(deck)

    async def delete_deck(self, deck_id: str) -> None:
        """Delete a deck."""
        if self._decks.pop(deck_id, None) is None:
            raise DeckNotFoundError(deck_id)
