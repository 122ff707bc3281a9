"""Infrastructure layer - persistence and resilience."""

from .deck_store import SqliteDeckStore
from .retry import RETRYABLE_EXCEPTIONS, retry_operation

__all__ = [
    "SqliteDeckStore",
    "RETRYABLE_EXCEPTIONS",
    "retry_operation",
]
