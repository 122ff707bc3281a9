"""Card entity representing a single flashcard."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, TypedDict


class CardDict(TypedDict):
    """Persisted card record. Field names are part of the storage format."""

    id: str
    term: str
    meaning: str
    example: str
    context: str
    translation: str
    srsLevel: int
    dueDate: str


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to timezone-aware UTC (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_instant(value: Any) -> datetime:
    """Parse a stored instant (ISO-8601 string or datetime) into UTC."""
    if isinstance(value, datetime):
        return to_utc(value)
    return to_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))


@dataclass(frozen=True)
class Card:
    """Flashcard entity.

    Optional text fields use the empty string for "absent", never None.

    Attributes:
        id: Opaque identifier, stable for the card's lifetime
        term: Primary prompt (non-empty for a valid card)
        meaning: Explanation of the term
        example: Sentence from the notes that uses the term
        context: Cultural background or usage note
        translation: Translation of the example sentence
        srs_level: Review level, 0 for new or failed cards
        due_date: Instant from which the card is eligible for review
    """

    id: str
    term: str
    meaning: str = ""
    example: str = ""
    context: str = ""
    translation: str = ""
    srs_level: int = 0
    due_date: datetime = datetime.min.replace(tzinfo=UTC)

    def is_valid(self) -> bool:
        """Check if card has a usable term."""
        return bool(self.term.strip())

    def to_dict(self) -> CardDict:
        """Convert card to its persisted record shape."""
        return {
            "id": self.id,
            "term": self.term,
            "meaning": self.meaning,
            "example": self.example,
            "context": self.context,
            "translation": self.translation,
            "srsLevel": self.srs_level,
            "dueDate": to_utc(self.due_date).isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        """Rebuild a card from a persisted record.

        Missing text fields become "" and a missing or negative level
        becomes 0.
        """
        level = data.get("srsLevel") or 0
        return cls(
            id=str(data["id"]),
            term=data.get("term") or "",
            meaning=data.get("meaning") or "",
            example=data.get("example") or "",
            context=data.get("context") or "",
            translation=data.get("translation") or "",
            srs_level=max(0, int(level)),
            due_date=parse_instant(data["dueDate"]),
        )
