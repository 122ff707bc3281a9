"""FastAPI dependency injection module.

Provides singleton instances of services for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends

from idiomcards.composition import create_deck_repository, create_example_assistant
from idiomcards.config import get_deck_db_path, get_deck_store_type, load_provider_configs
from idiomcards.domain.services.deck_library import DeckLibrary
from idiomcards.domain.services.example_assistant import ExampleAssistant
from idiomcards.domain.services.review_manager import ReviewManager
from idiomcards.ports.deck_repository import DeckRepository

logger = logging.getLogger(__name__)


# Singletons stored at module level
_deck_repository: DeckRepository | None = None
_deck_library: DeckLibrary | None = None
_review_manager: ReviewManager | None = None
_example_assistant: ExampleAssistant | None = None


async def init_dependencies(deck_repository: DeckRepository | None = None) -> None:
    """Initialize all singleton dependencies.

    Called during FastAPI lifespan startup.

    Args:
        deck_repository: Pre-built store (tests); otherwise chosen by DECK_STORE
    """
    global _deck_repository, _deck_library, _review_manager, _example_assistant

    _deck_repository = deck_repository or create_deck_repository(
        get_deck_store_type(), get_deck_db_path()
    )
    _deck_library = DeckLibrary(_deck_repository)
    _review_manager = ReviewManager(_deck_repository)
    _example_assistant = create_example_assistant(load_provider_configs())


async def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    Aborts a running review session. Every answered card is already
    persisted, so nothing is lost.
    """
    global _review_manager

    if _review_manager is not None and _review_manager.has_active_session:
        await _review_manager.abort_session()


def get_clock() -> datetime:
    """Dependency: Current instant (override in tests)."""
    return datetime.now(UTC)


def get_deck_library() -> DeckLibrary:
    """Dependency: Get DeckLibrary instance."""
    if _deck_library is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _deck_library


def get_review_manager() -> ReviewManager:
    """Dependency: Get ReviewManager instance."""
    if _review_manager is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _review_manager


def get_example_assistant() -> ExampleAssistant:
    """Dependency: Get ExampleAssistant instance."""
    if _example_assistant is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _example_assistant


# Type aliases for dependency injection
NowDep = Annotated[datetime, Depends(get_clock)]
DeckLibraryDep = Annotated[DeckLibrary, Depends(get_deck_library)]
ReviewManagerDep = Annotated[ReviewManager, Depends(get_review_manager)]
ExampleAssistantDep = Annotated[ExampleAssistant, Depends(get_example_assistant)]
