"""Deck library service - previews, deck CRUD, search and statistics."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from idiomcards.domain.constants import SRS_INTERVALS_DAYS, TITLE_PREFIX, Messages
from idiomcards.domain.entities.card import Card, to_utc
from idiomcards.domain.entities.deck import Deck
from idiomcards.domain.services.note_extractor import extract
from idiomcards.domain.services.scheduler import due_cards
from idiomcards.domain.value_objects.deck_stats import DeckSummary, LevelCount
from idiomcards.ports.deck_repository import DeckRepository

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(rf"^{re.escape(TITLE_PREFIX)}[ \t]*(.*)", re.MULTILINE)


class EmptyDeckError(Exception):
    """Raised when saving a deck without cards."""

    pass


class InvalidCardError(ValueError):
    """Raised when a card to be stored has a blank term."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card {card_id} has an empty term")


def _check_cards(cards: list[Card]) -> None:
    for card in cards:
        if not card.is_valid():
            raise InvalidCardError(card.id)


@dataclass
class PreviewResult:
    """Cards generated from note text, ready to be edited or saved."""

    cards: list[Card]
    title: str
    message: str

    @property
    def success(self) -> bool:
        return bool(self.cards)


def format_timestamp(value: datetime) -> str:
    """Format an instant the way deck titles show it (YYYY/M/D HH:MM:SS)."""
    value = to_utc(value)
    return f"{value.year}/{value.month}/{value.day} {value:%H:%M:%S}"


def detect_title(note_text: str, now: datetime) -> str:
    """Get the deck title from a "标题：" line, or a timestamped default."""
    match = _TITLE_RE.search(note_text or "")
    if match and match.group(1).strip():
        return match.group(1).strip()
    return Messages.DEFAULT_DECK_TITLE.format(timestamp=format_timestamp(now))


def build_preview(note_text: str, now: datetime) -> PreviewResult:
    """Extract cards from notes: fresh ids, level 0, due now."""
    cards = [record.to_card(now) for record in extract(note_text)]
    return PreviewResult(
        cards=cards,
        title=detect_title(note_text, now),
        message=Messages.preview_result(len(cards)),
    )


def count_levels(decks: list[Deck]) -> list[LevelCount]:
    """Count cards per review level across decks.

    Always reports levels 0..len(ladder); higher levels are added when
    cards have reached them.
    """
    counts = [0] * (len(SRS_INTERVALS_DAYS) + 1)
    for deck in decks:
        for card in deck.cards:
            level = max(card.srs_level, 0)
            if level >= len(counts):
                counts.extend([0] * (level - len(counts) + 1))
            counts[level] += 1
    return [LevelCount(level=level, count=count) for level, count in enumerate(counts)]


def summarize(deck: Deck, now: datetime) -> DeckSummary:
    """Build a listing summary with the deck's due count."""
    return DeckSummary(
        id=deck.id,
        title=deck.title,
        card_count=len(deck.cards),
        due_count=len(due_cards(deck, now)),
        created_at=deck.created_at,
    )


class DeckLibrary:
    """Deck operations on top of the DeckRepository port.

    Storage errors propagate to the caller unchanged; nothing here keeps
    state of its own.
    """

    def __init__(self, repository: DeckRepository) -> None:
        self._repository = repository

    async def list_decks(self) -> list[Deck]:
        """Get all decks, newest first."""
        return await self._repository.list_decks()

    async def get_deck(self, deck_id: str) -> Deck:
        return await self._repository.get_deck(deck_id)

    async def save_deck(
        self,
        cards: list[Card],
        now: datetime,
        note_text: str = "",
        title: str | None = None,
    ) -> Deck:
        """Save previewed cards as a new deck.

        The title is taken from ``title``, else from the notes, else a
        timestamped default.

        Raises:
            EmptyDeckError: If there are no cards
            InvalidCardError: If a card has a blank term
        """
        if not cards:
            raise EmptyDeckError(Messages.NOTHING_TO_SAVE)
        _check_cards(cards)

        deck_title = (title or "").strip() or detect_title(note_text, now)
        deck = await self._repository.create_deck(deck_title, cards)
        logger.info(f"Deck saved: {deck.title}", extra={"deck_id": deck.id, "cards": len(cards)})
        return deck

    async def update_deck(
        self,
        deck_id: str,
        title: str | None = None,
        cards: list[Card] | None = None,
    ) -> Deck:
        """Update a deck's title and/or cards.

        Raises:
            InvalidCardError: If a card has a blank term
        """
        if cards is not None:
            _check_cards(cards)
        return await self._repository.update_deck(deck_id, title=title, cards=cards)

    async def delete_deck(self, deck_id: str) -> None:
        await self._repository.delete_deck(deck_id)
        logger.info("Deck deleted", extra={"deck_id": deck_id})

    async def search(self, query: str) -> list[Deck]:
        """Get decks whose title or any card term contains the query."""
        decks = await self._repository.list_decks()
        return [deck for deck in decks if deck.matches(query.strip())]

    async def summaries(self, now: datetime, query: str = "") -> list[DeckSummary]:
        """Get deck summaries (newest first), optionally filtered by search."""
        decks = await self.search(query) if query else await self._repository.list_decks()
        return [summarize(deck, now) for deck in decks]

    async def learning_stats(self) -> list[LevelCount]:
        """Count cards per review level across all decks."""
        return count_levels(await self._repository.list_decks())
