"""
Spaced Repetition Scheduler.

Pure state transitions over a card's review level and due date. The
current time is always passed in, so callers (and tests) own the clock.

    AGAIN -> level 0,   due now + 10 minutes
    GOOD  -> level L+1, due now + INTERVAL[clamp(L+1)] days
    EASY  -> level L+2, due now + INTERVAL[clamp(L+2)] days
"""

import logging
import random
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta

from idiomcards.domain.constants import RELEARN_DELAY_MINUTES, SRS_INTERVALS_DAYS
from idiomcards.domain.entities.card import Card, to_utc
from idiomcards.domain.entities.deck import Deck
from idiomcards.domain.value_objects.review_decision import ReviewDecision

logger = logging.getLogger(__name__)

MAX_LADDER_INDEX = len(SRS_INTERVALS_DAYS) - 1


def clamp_level(level: int) -> int:
    """Clamp a level to a valid ladder index (negative levels read as 0)."""
    return min(max(level, 0), MAX_LADDER_INDEX)


def interval_for(level: int) -> timedelta:
    """Get the review interval for a level."""
    return timedelta(days=SRS_INTERVALS_DAYS[clamp_level(level)])


def next_level(level: int, decision: ReviewDecision) -> int:
    """Compute the level after a decision. The level itself is not clamped."""
    level = max(level, 0)
    if decision is ReviewDecision.AGAIN:
        return 0
    if decision is ReviewDecision.GOOD:
        return level + 1
    return level + 2


def next_due(new_level: int, decision: ReviewDecision, now: datetime) -> datetime:
    """Compute the next due instant for a decision."""
    now = to_utc(now)
    if decision is ReviewDecision.AGAIN:
        return now + timedelta(minutes=RELEARN_DELAY_MINUTES)
    return now + interval_for(new_level)


def grade(card: Card, decision: ReviewDecision | str, now: datetime) -> Card:
    """Apply a review decision to a card.

    Args:
        card: Card being reviewed (not mutated)
        decision: AGAIN, GOOD or EASY
        now: Current instant

    Returns:
        Copy of the card with new level and due date, other fields unchanged

    Raises:
        InvalidDecisionError: If decision is not a known decision
    """
    decision = ReviewDecision.parse(decision)
    new_level = next_level(card.srs_level, decision)
    due_date = next_due(new_level, decision, now)

    logger.debug(
        "card_graded",
        extra={
            "card_id": card.id,
            "decision": str(decision),
            "previous_level": card.srs_level,
            "new_level": new_level,
        },
    )
    return replace(card, srs_level=new_level, due_date=due_date)


def is_due(card: Card, now: datetime) -> bool:
    """Check if a card is eligible for review at ``now``."""
    return to_utc(card.due_date) <= to_utc(now)


def due_cards(source: Deck | Iterable[Card], now: datetime) -> list[Card]:
    """Get the cards whose due date is at or before ``now``, in deck order."""
    cards = source.cards if isinstance(source, Deck) else source
    return [card for card in cards if is_due(card, now)]


def shuffle_queue(cards: Iterable[Card], rng: random.Random | None = None) -> list[Card]:
    """Return a fully shuffled copy of the cards.

    Args:
        cards: Cards to order
        rng: Random source, inject a seeded one for a reproducible order
    """
    queue = list(cards)
    (rng or random.Random()).shuffle(queue)
    return queue
