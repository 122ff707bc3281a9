"""
Tests for the review manager.

Covers session start, grading the canonical card, write-before-advance
with retries, completion and abort.
"""

import asyncio
import random
from dataclasses import replace
from datetime import timedelta

import pytest

from idiomcards.adapters.memory_deck_store import InMemoryDeckStore
from idiomcards.domain.constants import Messages
from idiomcards.domain.services.review_manager import NoActiveSessionError, ReviewManager
from idiomcards.domain.services.scheduler import due_cards, shuffle_queue
from idiomcards.domain.value_objects import InvalidDecisionError, ReviewDecision, SessionState
from idiomcards.infrastructure.deck_store import SqliteDeckStore
from idiomcards.ports.deck_repository import (
    DeckNotFoundError,
    StorageError,
    TransientStorageError,
)


class FlakyDeckStore(InMemoryDeckStore):
    """Memory store whose card writes fail a set number of times."""

    def __init__(self, decks, failures: int, error: type[Exception] = TransientStorageError):
        super().__init__(decks)
        self.failures = failures
        self.error = error
        self.update_calls = 0

    async def update_deck(self, deck_id, title=None, cards=None):
        self.update_calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise self.error("disk busy")
        return await super().update_deck(deck_id, title=title, cards=cards)


@pytest.fixture
def manager(memory_store) -> ReviewManager:
    return ReviewManager(memory_store, rng=random.Random(7), flush_initial_wait=0)


class TestStartSession:
    async def test_queue_is_due_cards_in_seeded_order(self, manager, mixed_deck, now):
        result = await manager.start_session("deck-1", now)

        expected = shuffle_queue(due_cards(mixed_deck, now), random.Random(7))
        assert result.session.queue == expected
        assert result.due_count == 2
        assert not result.nothing_due
        assert manager.has_active_session

    async def test_nothing_due(self, manager, now):
        result = await manager.start_session("deck-1", now - timedelta(days=30))

        assert result.nothing_due
        assert result.due_count == 0
        assert result.message == Messages.NOTHING_DUE
        assert not manager.has_active_session

    async def test_unknown_deck(self, manager, now):
        with pytest.raises(DeckNotFoundError):
            await manager.start_session("missing", now)

    async def test_new_session_replaces_old_one(self, manager, now):
        first = (await manager.start_session("deck-1", now)).session

        second = (await manager.start_session("deck-1", now)).session

        assert first.state is SessionState.ABORTED
        assert manager.get_active_session() is second

    async def test_nothing_due_keeps_running_session(self, manager, now):
        running = (await manager.start_session("deck-1", now)).session

        await manager.start_session("deck-1", now - timedelta(days=30))

        assert manager.get_active_session() is running
        assert running.state is SessionState.ACTIVE


class TestAnswer:
    async def test_grade_is_persisted_on_canonical_card(self, manager, memory_store, now):
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()

        result = await manager.answer(ReviewDecision.GOOD, now)

        stored = (await memory_store.get_deck("deck-1")).find_card(current.id)
        assert stored.srs_level == current.srs_level + 1
        assert stored == result.card
        assert result.remaining_count == 1
        assert result.next_card is session.queue[1]
        assert not result.completed

    async def test_other_cards_untouched(self, manager, memory_store, mixed_deck, now):
        await manager.start_session("deck-1", now)

        await manager.answer("again", now)

        deck = await memory_store.get_deck("deck-1")
        assert [c.id for c in deck.cards] == ["c1", "c2", "c3"]
        assert deck.find_card("c3") == mixed_deck.find_card("c3")

    async def test_again_resets_card(self, manager, memory_store, now):
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()

        await manager.answer(ReviewDecision.AGAIN, now)

        stored = (await memory_store.get_deck("deck-1")).find_card(current.id)
        assert stored.srs_level == 0
        assert stored.due_date == now + timedelta(minutes=10)

    async def test_grades_card_edited_during_session(self, manager, memory_store, now):
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()
        deck = await memory_store.get_deck("deck-1")
        edited = [
            replace(card, meaning="新的") if card.id == current.id else card for card in deck.cards
        ]
        await memory_store.update_deck("deck-1", cards=edited)

        result = await manager.answer(ReviewDecision.GOOD, now)

        assert result.card.meaning == "新的"

    async def test_card_removed_during_session_is_skipped(self, manager, memory_store, now):
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()
        deck = await memory_store.get_deck("deck-1")
        await memory_store.update_deck(
            "deck-1", cards=[c for c in deck.cards if c.id != current.id]
        )

        result = await manager.answer(ReviewDecision.GOOD, now)

        assert result.card is None
        assert result.remaining_count == 1
        assert len((await memory_store.get_deck("deck-1")).cards) == 2

    async def test_flip_resets_after_answer(self, manager, now):
        await manager.start_session("deck-1", now)
        assert manager.flip() is True

        await manager.answer(ReviewDecision.EASY, now)

        assert manager.get_active_session().is_flipped is False

    async def test_completion_clears_session(self, manager, now):
        await manager.start_session("deck-1", now)
        await manager.answer(ReviewDecision.GOOD, now)

        result = await manager.answer(ReviewDecision.EASY, now)

        assert result.completed
        assert result.next_card is None
        assert result.message == Messages.REVIEW_COMPLETE
        assert result.stats["cards_reviewed"] == 2
        assert result.stats["decisions"] == {"again": 0, "good": 1, "easy": 1}
        assert not manager.has_active_session

    async def test_invalid_decision_changes_nothing(self, manager, memory_store, mixed_deck, now):
        session = (await manager.start_session("deck-1", now)).session

        with pytest.raises(InvalidDecisionError):
            await manager.answer("hard", now)

        assert session.current_index == 0
        assert (await memory_store.get_deck("deck-1")) == mixed_deck

    async def test_answer_without_session(self, manager, now):
        with pytest.raises(NoActiveSessionError):
            await manager.answer(ReviewDecision.GOOD, now)

        with pytest.raises(NoActiveSessionError):
            manager.flip()


class TestPersistenceFailures:
    async def test_transient_failure_is_retried(self, mixed_deck, now):
        store = FlakyDeckStore([mixed_deck], failures=2)
        manager = ReviewManager(store, rng=random.Random(1), flush_initial_wait=0)
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()

        await manager.answer(ReviewDecision.GOOD, now)

        assert store.update_calls == 3
        assert session.current_index == 1
        stored = (await store.get_deck("deck-1")).find_card(current.id)
        assert stored.srs_level == current.srs_level + 1

    async def test_exhausted_retries_do_not_advance(self, mixed_deck, now):
        store = FlakyDeckStore([mixed_deck], failures=10)
        manager = ReviewManager(
            store, rng=random.Random(1), flush_attempts=3, flush_initial_wait=0
        )
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()

        with pytest.raises(TransientStorageError):
            await manager.answer(ReviewDecision.GOOD, now)

        assert store.update_calls == 3
        assert session.current_index == 0
        assert session.graded == []
        assert manager.get_active_session().get_current_card() == current
        assert (await store.get_deck("deck-1")) == mixed_deck

    async def test_permanent_failure_is_not_retried(self, mixed_deck, now):
        store = FlakyDeckStore([mixed_deck], failures=1, error=StorageError)
        manager = ReviewManager(store, rng=random.Random(1), flush_initial_wait=0)
        session = (await manager.start_session("deck-1", now)).session

        with pytest.raises(StorageError):
            await manager.answer(ReviewDecision.GOOD, now)

        assert store.update_calls == 1
        assert session.current_index == 0

        # The next attempt succeeds and the session moves on
        await manager.answer(ReviewDecision.GOOD, now)
        assert session.current_index == 1


class TestAbort:
    async def test_abort_keeps_grades(self, manager, memory_store, now):
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()
        await manager.answer(ReviewDecision.EASY, now)

        stats = await manager.abort_session()

        assert stats["cards_reviewed"] == 1
        assert stats["cards_total"] == 2
        assert session.state is SessionState.ABORTED
        assert not manager.has_active_session
        stored = (await memory_store.get_deck("deck-1")).find_card(current.id)
        assert stored.srs_level == current.srs_level + 2

    async def test_abort_without_session(self, manager):
        with pytest.raises(NoActiveSessionError):
            await manager.abort_session()

    async def test_abort_waits_for_answer_in_flight(self, manager, memory_store, now):
        session = (await manager.start_session("deck-1", now)).session
        current = session.get_current_card()

        result, stats = await asyncio.gather(
            manager.answer(ReviewDecision.GOOD, now), manager.abort_session()
        )

        assert result.card.id == current.id
        assert stats["cards_reviewed"] == 1
        assert session.state is SessionState.ABORTED


class TestConcurrentAnswers:
    async def test_overlapping_answers_grade_each_card_once(self, tmp_path, make_card, now):
        store = SqliteDeckStore(str(tmp_path / "decks.db"))
        deck = await store.create_deck(
            "Friends S01E01",
            [make_card("a", srs_level=0), make_card("b", term="hit the sack", srs_level=0)],
        )
        manager = ReviewManager(store, rng=random.Random(3), flush_initial_wait=0)
        await manager.start_session(deck.id, now)

        first, second = await asyncio.gather(
            manager.answer(ReviewDecision.GOOD, now),
            manager.answer(ReviewDecision.GOOD, now),
        )

        assert {first.card.id, second.card.id} == {"a", "b"}
        assert second.completed
        assert not manager.has_active_session
        stored = await store.get_deck(deck.id)
        assert [c.srs_level for c in stored.cards] == [1, 1]
