"""Request/response models shared by the API routes."""

from datetime import datetime

from fastapi import HTTPException
from pydantic import BaseModel, Field, field_validator

from idiomcards.domain.entities.card import Card, to_utc
from idiomcards.domain.entities.deck import Deck


class CardModel(BaseModel):
    """Card in API requests and responses (persisted field names)."""

    id: str
    term: str = Field(..., min_length=1)
    meaning: str = ""
    example: str = ""
    context: str = ""
    translation: str = ""
    srsLevel: int = Field(0, ge=0)
    dueDate: datetime

    @field_validator("term", mode="before")
    @classmethod
    def strip_term(cls, value):
        """Blank terms collapse to "" so min_length rejects them."""
        return value.strip() if isinstance(value, str) else value

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(
            id=card.id,
            term=card.term,
            meaning=card.meaning,
            example=card.example,
            context=card.context,
            translation=card.translation,
            srsLevel=card.srs_level,
            dueDate=card.due_date,
        )

    def to_card(self) -> Card:
        return Card(
            id=self.id,
            term=self.term,
            meaning=self.meaning,
            example=self.example,
            context=self.context,
            translation=self.translation,
            srs_level=self.srsLevel,
            due_date=to_utc(self.dueDate),
        )


class DeckModel(BaseModel):
    """Full deck with cards."""

    id: str
    title: str
    cards: list[CardModel]
    createdAt: datetime

    @classmethod
    def from_deck(cls, deck: Deck) -> "DeckModel":
        return cls(
            id=deck.id,
            title=deck.title,
            cards=[CardModel.from_card(c) for c in deck.cards],
            createdAt=deck.created_at,
        )


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    error: ErrorDetail


def api_error(status_code: int, code: str, message: str) -> HTTPException:
    """Build an HTTPException with the standard error body."""
    return HTTPException(
        status_code=status_code,
        detail={"error": {"code": code, "message": message}},
    )
