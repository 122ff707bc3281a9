"""
Example Assistant.

Domain service that asks a text provider for example sentences for a
card. It only reads card text; a failed or unconfigured provider turns
into a readable reply and never affects scheduling or stored cards.
"""

import logging
import time

from idiomcards.domain.constants import EXAMPLE_PROMPT_TEMPLATE, Messages
from idiomcards.ports.text_generation import (
    ExampleRequest,
    ExampleResponse,
    ProviderNotConfiguredError,
    TextGenerationError,
    TextGenerationPort,
)

logger = logging.getLogger(__name__)


def build_example_prompt(term: str, meaning: str) -> str:
    """Build the example-sentence prompt for a term."""
    return EXAMPLE_PROMPT_TEMPLATE.format(term=term, meaning=meaning)


class ExampleAssistant:
    """Routes example requests to the selected provider.

    Responsibilities:
    - Build the prompt from card text
    - Pick the provider by name
    - Convert provider failures into an error reply
    """

    def __init__(self, providers: dict[str, TextGenerationPort], default_provider: str) -> None:
        """Initialize assistant.

        Args:
            providers: Provider name -> port implementation
            default_provider: Provider used when a request names none
        """
        self._providers = providers
        self._default_provider = default_provider

    @property
    def provider_names(self) -> list[str]:
        return sorted(self._providers)

    async def suggest_examples(self, request: ExampleRequest) -> ExampleResponse:
        """Generate example sentences for a term.

        Returns:
            Reply with the generated text, or with ok=False and an error
            message when the provider fails
        """
        provider_name = request.provider or self._default_provider
        start_time = time.perf_counter()

        try:
            provider = self._providers.get(provider_name)
            if provider is None:
                raise ProviderNotConfiguredError(f"Unknown AI provider '{provider_name}'")

            text = await provider.complete(build_example_prompt(request.term, request.meaning))
        except TextGenerationError as e:
            logger.warning(f"Example generation failed ({provider_name}): {e}")
            return ExampleResponse(
                text=Messages.ASSISTANT_UNAVAILABLE.format(error=e),
                provider=provider_name,
                ok=False,
            )

        logger.info(
            "examples_generated",
            extra={
                "provider": provider_name,
                "elapsed_ms": round((time.perf_counter() - start_time) * 1000, 2),
                "response_length": len(text),
            },
        )
        return ExampleResponse(text=text, provider=provider_name)
