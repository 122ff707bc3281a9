"""
Composition Root.

Centralized dependency wiring for the application.
All factory functions that instantiate adapters belong here to maintain
hexagonal architecture (domain NEVER imports from adapters).
"""

import logging
from pathlib import Path

from idiomcards.adapters.chat_completion import ChatCompletionAdapter
from idiomcards.adapters.memory_deck_store import InMemoryDeckStore
from idiomcards.config import DEFAULT_PROVIDER, ProviderConfig
from idiomcards.domain.services.example_assistant import ExampleAssistant
from idiomcards.infrastructure.deck_store import SqliteDeckStore
from idiomcards.ports.deck_repository import DeckRepository

logger = logging.getLogger(__name__)


def create_deck_repository(store_type: str, db_path: str) -> DeckRepository:
    """Create the deck store selected by configuration.

    Args:
        store_type: 'sqlite' or 'memory'
        db_path: SQLite file path (ignored for 'memory')

    Raises:
        ValueError: If store_type is unknown
    """
    if store_type == "memory":
        logger.info("Using in-memory deck store")
        return InMemoryDeckStore()
    if store_type == "sqlite":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using SQLite deck store: {db_path}")
        return SqliteDeckStore(db_path)
    raise ValueError(f"Invalid DECK_STORE: '{store_type}'. Valid options: 'sqlite', 'memory'")


def create_example_assistant(configs: dict[str, ProviderConfig]) -> ExampleAssistant:
    """Create ExampleAssistant with one adapter per provider.

    Unconfigured providers are still registered and answer with a
    "not configured" error reply.
    """
    providers = {name: ChatCompletionAdapter(config) for name, config in configs.items()}
    configured = [name for name, config in configs.items() if config.is_configured]
    logger.info(f"AI providers configured: {configured or 'none'}")
    return ExampleAssistant(providers, default_provider=DEFAULT_PROVIDER)
