"""Port interface for deck storage."""

from typing import Protocol, runtime_checkable

from idiomcards.domain.entities.card import Card
from idiomcards.domain.entities.deck import Deck


class StorageError(Exception):
    """Base exception for deck storage errors."""

    pass


class TransientStorageError(StorageError):
    """Storage temporarily unavailable - safe to retry."""

    pass


class DeckNotFoundError(StorageError):
    """Raised when no deck has the requested id."""

    def __init__(self, deck_id: str):
        self.deck_id = deck_id
        super().__init__(f"Deck {deck_id} not found")


@runtime_checkable
class DeckRepository(Protocol):
    """Port for deck persistence.

    Abstracts the document store that keeps decks keyed by opaque ids.
    Implementations assign ids and creation instants and must keep the
    card record shape (see Card.to_dict) verbatim.
    """

    async def list_decks(self) -> list[Deck]:
        """Get all decks, newest first."""
        ...

    async def get_deck(self, deck_id: str) -> Deck:
        """Get one deck.

        Raises:
            DeckNotFoundError: If the deck does not exist
        """
        ...

    async def create_deck(self, title: str, cards: list[Card]) -> Deck:
        """Create a deck with a new id and creation instant."""
        ...

    async def update_deck(
        self,
        deck_id: str,
        title: str | None = None,
        cards: list[Card] | None = None,
    ) -> Deck:
        """Replace the title and/or the full card list of a deck.

        Raises:
            DeckNotFoundError: If the deck does not exist
        """
        ...

    async def delete_deck(self, deck_id: str) -> None:
        """Delete a deck.

        Raises:
            DeckNotFoundError: If the deck does not exist
        """
        ...
