"""Review session entity for review session lifecycle management."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Self
from uuid import uuid4

from idiomcards.domain.entities.card import Card
from idiomcards.domain.value_objects.review_decision import ReviewDecision
from idiomcards.domain.value_objects.session_state import SessionState


@dataclass(frozen=True)
class GradedCard:
    """Outcome of one answered card.

    Attributes:
        card_id: Card that was graded
        decision: Learner's decision
        previous_level: Level before grading
        new_level: Level after grading
        due_date: Next due instant
    """

    card_id: str
    decision: ReviewDecision
    previous_level: int
    new_level: int
    due_date: datetime


@dataclass
class ReviewSession:
    """Review session entity (never persisted).

    The queue holds snapshots of the due cards taken at session start, in
    the order shuffled once at creation. The owning deck stays the source
    of truth for card state.

    Attributes:
        id: Unique session identifier (UUID v4)
        deck_id: Deck being reviewed
        queue: Due cards in review order
        current_index: Position of the card being shown
        is_flipped: Whether the answer side is showing
        state: Current session state
        graded: Outcomes recorded so far
        started_at: When session started
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    deck_id: str = ""
    queue: list[Card] = field(default_factory=list)
    current_index: int = 0
    is_flipped: bool = False
    state: SessionState = SessionState.ACTIVE
    graded: list[GradedCard] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, deck_id: str, queue: list[Card], started_at: datetime | None = None) -> Self:
        """Create a new active session over an already ordered queue."""
        return cls(
            deck_id=deck_id,
            queue=list(queue),  # Copy to avoid mutating caller's list
            started_at=started_at or datetime.now(UTC),
        )

    def get_current_card(self) -> Card | None:
        """Get the queue snapshot of the current card, or None when exhausted."""
        if self.current_index >= len(self.queue):
            return None
        return self.queue[self.current_index]

    def get_remaining_count(self) -> int:
        """Get number of cards remaining in queue (current card included)."""
        return max(0, len(self.queue) - self.current_index)

    def flip(self) -> bool:
        """Toggle the answer side and return the new flag."""
        self.is_flipped = not self.is_flipped
        return self.is_flipped

    def record_grade(self, outcome: GradedCard) -> Card | None:
        """Record a persisted grade for the current card and advance.

        Returns:
            Next card to review, or None if the queue is exhausted

        Raises:
            ValueError: If the session can't accept answers or the outcome
                is for a different card
        """
        if not self.state.can_accept_answers():
            raise ValueError(f"Cannot record answer in state {self.state}")

        current_card = self.get_current_card()
        if current_card is None:
            raise ValueError("No card to grade - queue is empty")
        if current_card.id != outcome.card_id:
            raise ValueError(
                f"Outcome for card {outcome.card_id} does not match current card {current_card.id}"
            )

        self.graded.append(outcome)
        self.current_index += 1
        self.is_flipped = False

        if self.current_index >= len(self.queue):
            self.state = SessionState.COMPLETE
        return self.get_current_card()

    def abort(self) -> None:
        """Stop the session. Grades already recorded are kept."""
        if self.state is SessionState.ACTIVE:
            self.state = SessionState.ABORTED

    def get_stats(self) -> dict:
        """Get session statistics."""
        decision_counts = {str(d): 0 for d in ReviewDecision}
        for outcome in self.graded:
            decision_counts[str(outcome.decision)] += 1

        return {
            "cards_reviewed": len(self.graded),
            "cards_total": len(self.queue),
            "decisions": decision_counts,
        }
