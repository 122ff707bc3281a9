"""Domain entities - objects with identity."""

from .card import Card, CardDict
from .deck import CardNotFoundError, Deck, DeckDict
from .review_session import GradedCard, ReviewSession

__all__ = [
    "Card",
    "CardDict",
    "CardNotFoundError",
    "Deck",
    "DeckDict",
    "GradedCard",
    "ReviewSession",
]
