"""Extraction record value object - a card candidate parsed from notes."""

from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

from idiomcards.domain.entities.card import Card, to_utc


@dataclass(frozen=True)
class ExtractionRecord:
    """Card fields recovered from note text, before identity and schedule."""

    term: str
    meaning: str = ""
    example: str = ""
    context: str = ""
    translation: str = ""

    def to_card(self, now: datetime, card_id: str | None = None) -> Card:
        """Materialize a new card: level 0, due immediately."""
        return Card(
            id=card_id or str(uuid4()),
            term=self.term,
            meaning=self.meaning,
            example=self.example,
            context=self.context,
            translation=self.translation,
            srs_level=0,
            due_date=to_utc(now),
        )
