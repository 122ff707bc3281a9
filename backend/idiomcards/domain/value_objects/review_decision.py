"""Review decision value object."""

from enum import StrEnum


class InvalidDecisionError(ValueError):
    """Raised for a grading signal outside AGAIN/GOOD/EASY."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid review decision: {value!r}. Expected again, good or easy")


class ReviewDecision(StrEnum):
    """Learner's answer to a card.

    - AGAIN: Failed recall, level resets and the card returns in 10 minutes
    - GOOD: Normal recall, one level up
    - EASY: Effortless recall, two levels up
    """

    AGAIN = "again"
    GOOD = "good"
    EASY = "easy"

    @classmethod
    def parse(cls, value: "ReviewDecision | str") -> "ReviewDecision":
        """Parse a decision from an enum member or its string value.

        Raises:
            InvalidDecisionError: If value is not a known decision
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidDecisionError(value)
