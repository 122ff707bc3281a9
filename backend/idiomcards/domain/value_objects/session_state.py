"""Session state value object for review session lifecycle management."""

from enum import StrEnum


class SessionState(StrEnum):
    """Review session lifecycle states.

    State machine:
        ACTIVE -> COMPLETE   (queue exhausted)
        ACTIVE -> ABORTED    (learner quit; graded cards stay graded)
    """

    ACTIVE = "active"
    COMPLETE = "complete"
    ABORTED = "aborted"

    def can_accept_answers(self) -> bool:
        """Check if session can accept new answers."""
        return self is SessionState.ACTIVE

    def is_terminal(self) -> bool:
        """Check if session is in a terminal state."""
        return self in (SessionState.COMPLETE, SessionState.ABORTED)
