"""Port interface for generative text services (example sentences)."""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class ExampleRequest(BaseModel):
    """Request for example sentences for a card."""

    term: str
    meaning: str = ""
    provider: str = "gemini"


class ExampleResponse(BaseModel):
    """Assistant reply. ``ok`` is False when ``text`` is an error message."""

    text: str
    provider: str
    ok: bool = True


@runtime_checkable
class TextGenerationPort(Protocol):
    """Text completion port: prompt in, generated text out.

    Implementations should:
    - Take their provider configuration explicitly (no environment reads)
    - Raise ProviderNotConfiguredError when no API key is set
    - Map provider failures to TextGenerationError subclasses
    """

    @property
    def provider(self) -> str:
        """Provider name (e.g., 'gemini')."""
        ...

    async def complete(self, prompt: str) -> str:
        """Generate text for a prompt.

        Raises:
            TextGenerationError: If generation fails
        """
        ...


class TextGenerationError(Exception):
    """Base exception for text generation errors."""

    pass


class ProviderNotConfiguredError(TextGenerationError):
    """Raised when the selected provider has no API key."""

    pass


class ProviderRateLimitError(TextGenerationError):
    """Raised when the provider rate limit is exceeded."""

    pass


class ProviderTimeoutError(TextGenerationError):
    """Raised when the provider request times out."""

    pass
