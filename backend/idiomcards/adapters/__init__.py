# Adapters layer - Concrete implementations (OpenAI-compatible providers, in-memory store)

from .chat_completion import ChatCompletionAdapter
from .memory_deck_store import InMemoryDeckStore

__all__ = [
    "ChatCompletionAdapter",
    "InMemoryDeckStore",
]
