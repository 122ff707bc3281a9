"""SQLite-based deck store.

Document-style persistence: one row per deck, cards kept as a JSON array
in the persisted Card record shape. Uses async-safe operations with
threading.
"""

import asyncio
import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from idiomcards.domain.entities.card import Card, parse_instant
from idiomcards.domain.entities.deck import Deck
from idiomcards.ports.deck_repository import (
    DeckNotFoundError,
    StorageError,
    TransientStorageError,
)

logger = logging.getLogger(__name__)


class SqliteDeckStore:
    """DeckRepository implementation backed by a SQLite file.

    Thread-safe async operations using asyncio.Lock and to_thread.
    A locked database is reported as TransientStorageError so callers
    can retry.
    """

    def __init__(self, db_path: str = "decks.db"):
        """Initialize deck store.

        Args:
            db_path: Path to SQLite database file

        Database tables are created synchronously on construction.
        """
        self._db_path = Path(db_path)
        self._lock = asyncio.Lock()
        self._init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection for one transaction (row access by name)."""
        conn = sqlite3.connect(self._db_path, timeout=5.0)
        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA synchronous=NORMAL")
            with conn:
                yield conn
        finally:
            conn.close()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._connect() as conn:
            # WAL mode persists to database file (only needs to be set once)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS decks (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    cards TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL
                )
            """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_decks_created
                ON decks(created_at DESC)
            """
            )

    async def _run(self, func, *args):
        """Run a synchronous operation off the event loop, mapping sqlite errors."""
        async with self._lock:
            try:
                return await asyncio.to_thread(func, *args)
            except sqlite3.OperationalError as e:
                logger.warning(f"Deck store operation failed: {e}")
                raise TransientStorageError(str(e)) from e
            except sqlite3.Error as e:
                logger.error(f"Deck store error: {e}")
                raise StorageError(str(e)) from e

    @staticmethod
    def _row_to_deck(row: sqlite3.Row) -> Deck:
        return Deck(
            id=row["id"],
            title=row["title"],
            cards=[Card.from_dict(c) for c in json.loads(row["cards"])],
            created_at=parse_instant(row["created_at"]),
        )

    @staticmethod
    def _dump_cards(cards: list[Card]) -> str:
        return json.dumps([c.to_dict() for c in cards], ensure_ascii=False)

    # =========================================================================
    # DeckRepository
    # =========================================================================

    async def list_decks(self) -> list[Deck]:
        """Get all decks, newest first."""
        return await self._run(self._list_sync)

    def _list_sync(self) -> list[Deck]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM decks ORDER BY created_at DESC").fetchall()
            return [self._row_to_deck(row) for row in rows]

    async def get_deck(self, deck_id: str) -> Deck:
        """Get one deck by id."""
        return await self._run(self._get_sync, deck_id)

    def _get_sync(self, deck_id: str) -> Deck:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM decks WHERE id = ?", (deck_id,)).fetchone()
            if row is None:
                raise DeckNotFoundError(deck_id)
            return self._row_to_deck(row)

    async def create_deck(self, title: str, cards: list[Card]) -> Deck:
        """Create a deck with a new id and creation instant."""
        deck = Deck(id=uuid4().hex, title=title, cards=list(cards), created_at=datetime.now(UTC))
        await self._run(self._insert_sync, deck)
        logger.info(f"Deck created: {deck.id}", extra={"card_count": len(deck.cards)})
        return deck

    def _insert_sync(self, deck: Deck) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO decks (id, title, cards, created_at) VALUES (?, ?, ?, ?)",
                (deck.id, deck.title, self._dump_cards(deck.cards), deck.created_at.isoformat()),
            )

    async def update_deck(
        self,
        deck_id: str,
        title: str | None = None,
        cards: list[Card] | None = None,
    ) -> Deck:
        """Replace the title and/or cards of a deck."""
        return await self._run(self._update_sync, deck_id, title, cards)

    def _update_sync(self, deck_id: str, title: str | None, cards: list[Card] | None) -> Deck:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM decks WHERE id = ?", (deck_id,)).fetchone()
            if row is None:
                raise DeckNotFoundError(deck_id)
            deck = self._row_to_deck(row)
            if title is not None:
                deck.title = title
            if cards is not None:
                deck.cards = list(cards)
            conn.execute(
                "UPDATE decks SET title = ?, cards = ? WHERE id = ?",
                (deck.title, self._dump_cards(deck.cards), deck_id),
            )
            return deck

    async def delete_deck(self, deck_id: str) -> None:
        """Delete a deck."""
        await self._run(self._delete_sync, deck_id)

    def _delete_sync(self, deck_id: str) -> None:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM decks WHERE id = ?", (deck_id,))
            if cursor.rowcount == 0:
                raise DeckNotFoundError(deck_id)
