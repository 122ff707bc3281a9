"""Review manager service for review session lifecycle management."""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime

from idiomcards.domain.constants import Messages
from idiomcards.domain.entities.card import Card
from idiomcards.domain.entities.review_session import GradedCard, ReviewSession
from idiomcards.domain.services.scheduler import due_cards, grade, shuffle_queue
from idiomcards.domain.value_objects.review_decision import ReviewDecision
from idiomcards.infrastructure.retry import DEFAULT_INITIAL_WAIT, retry_operation
from idiomcards.ports.deck_repository import DeckRepository

logger = logging.getLogger(__name__)


class NoActiveSessionError(Exception):
    """Raised when no review session is running."""

    pass


@dataclass
class StartReviewResult:
    """Result of starting a review session.

    ``session`` is None when nothing in the deck is due.
    """

    session: ReviewSession | None
    due_count: int
    message: str | None = None

    @property
    def nothing_due(self) -> bool:
        return self.session is None


@dataclass
class AnswerResult:
    """Result of answering the current card."""

    card: Card | None
    next_card: Card | None
    remaining_count: int
    completed: bool
    stats: dict = field(default_factory=dict)
    message: str | None = None


class ReviewManager:
    """Manages review sessions.

    Responsibilities:
    - Single active session (one writer, one reader)
    - One decision at a time: start, answer and abort hold the session lock
    - Build the due queue and shuffle it once with the injected random source
    - Grade the deck's canonical card, never the queue snapshot
    - Persist each grade before advancing the session

    Aborting keeps every grade already written.
    """

    def __init__(
        self,
        deck_repository: DeckRepository,
        rng: random.Random | None = None,
        flush_attempts: int = 3,
        flush_initial_wait: float = DEFAULT_INITIAL_WAIT,
    ):
        """Initialize review manager.

        Args:
            deck_repository: Port for deck storage
            rng: Random source for queue order (seed it in tests)
            flush_attempts: Attempts per storage write
            flush_initial_wait: First retry backoff in seconds
        """
        self._repository = deck_repository
        self._rng = rng or random.Random()
        self._flush_attempts = flush_attempts
        self._flush_initial_wait = flush_initial_wait
        self._active_session: ReviewSession | None = None
        self._lock = asyncio.Lock()

    @property
    def has_active_session(self) -> bool:
        return self._active_session is not None

    def get_active_session(self) -> ReviewSession | None:
        """Get the active session if one exists."""
        return self._active_session

    def _require_session(self) -> ReviewSession:
        if self._active_session is None:
            raise NoActiveSessionError("No active review session")
        return self._active_session

    async def start_session(self, deck_id: str, now: datetime) -> StartReviewResult:
        """Start reviewing the due cards of a deck.

        A running session is aborted first.

        Raises:
            DeckNotFoundError: If the deck does not exist
        """
        async with self._lock:
            return await self._start_session(deck_id, now)

    async def _start_session(self, deck_id: str, now: datetime) -> StartReviewResult:
        deck = await retry_operation(
            self._repository.get_deck,
            deck_id,
            max_attempts=self._flush_attempts,
            initial_wait=self._flush_initial_wait,
        )
        due = due_cards(deck, now)
        if not due:
            logger.info("Nothing due", extra={"deck_id": deck_id})
            return StartReviewResult(session=None, due_count=0, message=Messages.NOTHING_DUE)

        if self._active_session is not None:
            logger.info(f"Replacing active session {self._active_session.id}")
            self._active_session.abort()

        session = ReviewSession.create(deck.id, shuffle_queue(due, self._rng), started_at=now)
        self._active_session = session
        logger.info(
            f"Review session started: {session.id}",
            extra={"deck_id": deck.id, "due_count": len(due)},
        )
        return StartReviewResult(session=session, due_count=len(due))

    def flip(self) -> bool:
        """Flip the current card and return whether the answer is showing."""
        return self._require_session().flip()

    async def answer(self, decision: ReviewDecision | str, now: datetime) -> AnswerResult:
        """Grade the current card and advance.

        The grade is written to storage before the session moves on. If
        the write fails after retries the error propagates and the same
        card stays current. Overlapping calls are answered one after
        another, each against the card current at that point.

        Raises:
            NoActiveSessionError: If no session is running
            InvalidDecisionError: If decision is not AGAIN/GOOD/EASY
            StorageError: If the deck can't be read or written
        """
        async with self._lock:
            return await self._answer(decision, now)

    async def _answer(self, decision: ReviewDecision | str, now: datetime) -> AnswerResult:
        session = self._require_session()
        decision = ReviewDecision.parse(decision)

        snapshot = session.get_current_card()
        if snapshot is None:
            raise NoActiveSessionError("Review queue is exhausted")

        deck = await retry_operation(
            self._repository.get_deck,
            session.deck_id,
            max_attempts=self._flush_attempts,
            initial_wait=self._flush_initial_wait,
        )
        canonical = deck.find_card(snapshot.id)

        updated: Card | None = None
        if canonical is None:
            # Removed by an edit while the session was running
            logger.warning(f"Card {snapshot.id} no longer in deck {deck.id}, skipping")
            outcome = GradedCard(
                card_id=snapshot.id,
                decision=decision,
                previous_level=snapshot.srs_level,
                new_level=snapshot.srs_level,
                due_date=snapshot.due_date,
            )
        else:
            updated = grade(canonical, decision, now)
            deck.replace_card(updated)
            await retry_operation(
                self._repository.update_deck,
                deck.id,
                cards=deck.cards,
                max_attempts=self._flush_attempts,
                initial_wait=self._flush_initial_wait,
            )
            outcome = GradedCard(
                card_id=updated.id,
                decision=decision,
                previous_level=canonical.srs_level,
                new_level=updated.srs_level,
                due_date=updated.due_date,
            )

        next_card = session.record_grade(outcome)
        completed = session.state.is_terminal()
        stats = session.get_stats()
        if completed:
            logger.info(f"Review session complete: {session.id}", extra=stats)
            self._active_session = None

        return AnswerResult(
            card=updated,
            next_card=next_card,
            remaining_count=session.get_remaining_count(),
            completed=completed,
            stats=stats,
            message=Messages.REVIEW_COMPLETE if completed else None,
        )

    async def abort_session(self) -> dict:
        """Abort the running session and return its stats.

        Raises:
            NoActiveSessionError: If no session is running
        """
        async with self._lock:
            session = self._require_session()
            session.abort()
            self._active_session = None
        stats = session.get_stats()
        logger.info(f"Review session aborted: {session.id}", extra=stats)
        return stats
