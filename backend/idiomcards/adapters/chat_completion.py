"""Chat Completion Adapter.

Implements TextGenerationPort for any provider with an OpenAI-compatible
chat completions API (Gemini's OpenAI endpoint, DeepSeek).
"""

import logging

from openai import APIStatusError, APITimeoutError, AsyncOpenAI, RateLimitError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from idiomcards.config import ProviderConfig
from idiomcards.ports.text_generation import (
    ProviderNotConfiguredError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    TextGenerationError,
)

logger = logging.getLogger(__name__)


class ChatCompletionAdapter:
    """Text generation over the OpenAI SDK.

    The client is created lazily, so an unconfigured provider can still be
    registered and reports ProviderNotConfiguredError when used.
    """

    def __init__(self, config: ProviderConfig, client: AsyncOpenAI | None = None) -> None:
        """Initialize adapter.

        Args:
            config: Provider settings (key, model, endpoint)
            client: Pre-built client, mainly for tests
        """
        self._config = config
        self._client = client

    @property
    def provider(self) -> str:
        return self._config.name

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._config.is_configured:
                raise ProviderNotConfiguredError(
                    f"AI provider '{self._config.name}' is not configured. Set its API key."
                )
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url,
                timeout=self._config.timeout,
            )
            logger.info(
                f"ChatCompletionAdapter initialized: {self._config.name} ({self._config.model})"
            )
        return self._client

    @retry(
        retry=retry_if_exception_type(ProviderRateLimitError),
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    async def complete(self, prompt: str) -> str:
        """Generate text for a prompt.

        Raises:
            ProviderNotConfiguredError: If the provider has no API key
            ProviderRateLimitError: If rate limited (after one retry)
            ProviderTimeoutError: If the request times out
            TextGenerationError: For any other provider failure
        """
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self._config.model,
                messages=[{"role": "user", "content": prompt}],
                stream=False,
            )
        except RateLimitError as e:
            logger.warning(f"{self._config.name} rate limited: {e}")
            raise ProviderRateLimitError(str(e)) from e
        except APITimeoutError as e:
            logger.warning(f"{self._config.name} timeout: {e}")
            raise ProviderTimeoutError(str(e)) from e
        except APIStatusError as e:
            logger.error(f"{self._config.name} API error {e.status_code}: {e}")
            raise TextGenerationError(f"{self._config.name} API error: {e.status_code}") from e
        except Exception as e:
            logger.error(f"{self._config.name} completion failed: {e}")
            raise TextGenerationError(str(e)) from e

        if not response.choices or not response.choices[0].message.content:
            raise TextGenerationError(f"Empty response from {self._config.name}")

        if response.usage:
            logger.debug(
                "llm_usage",
                extra={
                    "provider": self._config.name,
                    "model": self._config.model,
                    "prompt_tokens": response.usage.prompt_tokens,
                    "completion_tokens": response.usage.completion_tokens,
                },
            )
        return response.choices[0].message.content
