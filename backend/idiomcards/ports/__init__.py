# Ports layer - Abstract interfaces (Protocols)

from .deck_repository import (
    DeckNotFoundError,
    DeckRepository,
    StorageError,
    TransientStorageError,
)
from .text_generation import (
    ExampleRequest,
    ExampleResponse,
    ProviderNotConfiguredError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    TextGenerationError,
    TextGenerationPort,
)

__all__ = [
    "DeckRepository",
    "DeckNotFoundError",
    "StorageError",
    "TransientStorageError",
    "TextGenerationPort",
    "ExampleRequest",
    "ExampleResponse",
    "TextGenerationError",
    "ProviderNotConfiguredError",
    "ProviderRateLimitError",
    "ProviderTimeoutError",
]
