"""
Contract tests for the deck stores.

Every test runs against both the SQLite store and the in-memory store.
"""

import json
import sqlite3

import pytest

from idiomcards.adapters.memory_deck_store import InMemoryDeckStore
from idiomcards.composition import create_deck_repository
from idiomcards.infrastructure.deck_store import SqliteDeckStore
from idiomcards.ports.deck_repository import (
    DeckNotFoundError,
    DeckRepository,
    StorageError,
    TransientStorageError,
)


@pytest.fixture(params=["sqlite", "memory"])
def store(request, tmp_path):
    if request.param == "sqlite":
        return SqliteDeckStore(str(tmp_path / "decks.db"))
    return InMemoryDeckStore()


class TestDeckRepositoryContract:
    def test_implements_port(self, store):
        assert isinstance(store, DeckRepository)

    async def test_create_and_get(self, store, mixed_deck):
        created = await store.create_deck("Friends", mixed_deck.cards)

        fetched = await store.get_deck(created.id)

        assert fetched.id == created.id
        assert fetched.title == "Friends"
        assert fetched.cards == mixed_deck.cards
        assert fetched.created_at == created.created_at

    async def test_ids_are_unique(self, store, mixed_deck):
        first = await store.create_deck("a", mixed_deck.cards)
        second = await store.create_deck("b", mixed_deck.cards)

        assert first.id != second.id
        assert {d.id for d in await store.list_decks()} == {first.id, second.id}

    async def test_update_title_only(self, store, mixed_deck):
        created = await store.create_deck("old", mixed_deck.cards)

        updated = await store.update_deck(created.id, title="new")

        assert updated.title == "new"
        assert (await store.get_deck(created.id)).cards == mixed_deck.cards

    async def test_update_cards_only(self, store, mixed_deck, make_card):
        created = await store.create_deck("deck", mixed_deck.cards)
        cards = [make_card("n1", srs_level=6, translation="译文")]

        await store.update_deck(created.id, cards=cards)

        fetched = await store.get_deck(created.id)
        assert fetched.title == "deck"
        assert fetched.cards == cards

    async def test_delete(self, store, mixed_deck):
        created = await store.create_deck("deck", mixed_deck.cards)

        await store.delete_deck(created.id)

        assert await store.list_decks() == []
        with pytest.raises(DeckNotFoundError):
            await store.get_deck(created.id)

    @pytest.mark.parametrize("operation", ["get_deck", "delete_deck"])
    async def test_missing_deck(self, store, operation):
        with pytest.raises(DeckNotFoundError):
            await getattr(store, operation)("missing")

    async def test_update_missing_deck(self, store):
        with pytest.raises(DeckNotFoundError):
            await store.update_deck("missing", title="x")

    async def test_returned_decks_are_detached(self, store, mixed_deck, make_card):
        created = await store.create_deck("deck", mixed_deck.cards)
        fetched = await store.get_deck(created.id)

        fetched.cards.append(make_card("local-only"))
        fetched.title = "changed locally"

        stored = await store.get_deck(created.id)
        assert stored.title == "deck"
        assert len(stored.cards) == 3


class TestSqliteDeckStore:
    async def test_persists_across_instances(self, tmp_path, mixed_deck):
        path = str(tmp_path / "decks.db")
        created = await SqliteDeckStore(path).create_deck("kept", mixed_deck.cards)

        reopened = SqliteDeckStore(path)

        assert (await reopened.get_deck(created.id)).cards == mixed_deck.cards

    async def test_cards_stored_in_record_shape(self, tmp_path, mixed_deck):
        path = tmp_path / "decks.db"
        created = await SqliteDeckStore(str(path)).create_deck("deck", mixed_deck.cards)

        conn = sqlite3.connect(path)
        try:
            (raw,) = conn.execute("SELECT cards FROM decks WHERE id = ?", (created.id,)).fetchone()
        finally:
            conn.close()

        records = json.loads(raw)
        assert records[0] == mixed_deck.cards[0].to_dict()
        assert "srsLevel" in records[1]
        assert "dueDate" in records[1]

    async def test_locked_database_is_transient(self, tmp_path, monkeypatch):
        store = SqliteDeckStore(str(tmp_path / "decks.db"))

        def locked():
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(store, "_list_sync", locked)

        with pytest.raises(TransientStorageError):
            await store.list_decks()

    async def test_other_errors_are_permanent(self, tmp_path, monkeypatch):
        store = SqliteDeckStore(str(tmp_path / "decks.db"))

        def broken():
            raise sqlite3.DatabaseError("file is not a database")

        monkeypatch.setattr(store, "_list_sync", broken)

        with pytest.raises(StorageError) as exc_info:
            await store.list_decks()
        assert not isinstance(exc_info.value, TransientStorageError)


class TestCreateDeckRepository:
    def test_memory(self, tmp_path):
        assert isinstance(create_deck_repository("memory", str(tmp_path / "x.db")), InMemoryDeckStore)

    def test_sqlite_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "decks.db"

        store = create_deck_repository("sqlite", str(path))

        assert isinstance(store, SqliteDeckStore)
        assert path.exists()

    def test_unknown(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid DECK_STORE"):
            create_deck_repository("redis", str(tmp_path / "x.db"))
