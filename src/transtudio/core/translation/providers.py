"""Concrete model providers and the registry that binds them to provider types."""

from typing import Dict, Iterable, Iterator, Optional

import anthropic
import structlog
from google import genai

from transtudio.config import Settings
from transtudio.core.errors import ProviderError
from transtudio.core.translation.interface import ProviderClient
from transtudio.core.translation.litellm import LiteLLMProvider
from transtudio.core.types import ProviderType


class AnthropicProvider(LiteLLMProvider):
    """Anthropic Claude models.

    Token counting uses the Messages count-tokens endpoint so the system
    prompt is accounted exactly as it will be billed.
    """

    litellm_prefix = "anthropic"
    credential_name = "ANTHROPIC_API_KEY"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._client: Optional[anthropic.AsyncAnthropic] = None

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.ANTHROPIC

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self._client

    async def count_tokens(
        self,
        provider_model_id: str,
        text: str,
        system_prompt: str,
    ) -> Optional[int]:
        """Count input tokens with the Anthropic API, or None without a key."""
        if not self.has_credentials:
            return None

        response = await self._get_client().messages.count_tokens(
            model=provider_model_id,
            system=system_prompt,
            messages=[{"role": "user", "content": text}],
        )
        return response.input_tokens


class GoogleProvider(LiteLLMProvider):
    """Google Gemini models."""

    litellm_prefix = "gemini"
    credential_name = "GOOGLE_GENERATIVE_AI_API_KEY"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._client: Optional[genai.Client] = None

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GOOGLE

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def count_tokens(
        self,
        provider_model_id: str,
        text: str,
        system_prompt: str,
    ) -> Optional[int]:
        """Count input tokens with the Gemini API, or None without a key."""
        if not self.has_credentials:
            return None

        # The Gemini API rejects system_instruction when counting, so the
        # system prompt is counted as a leading content part instead.
        response = await self._get_client().aio.models.count_tokens(
            model=provider_model_id,
            contents=[system_prompt, text],
        )
        return response.total_tokens


class ProviderRegistry:
    """Maps each provider type to the client that serves it.

    New providers are added by registering a client; nothing else in the
    pipeline branches on provider identity.
    """

    def __init__(self, providers: Iterable[ProviderClient] = ()) -> None:
        self._providers: Dict[ProviderType, ProviderClient] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: ProviderClient) -> None:
        """Add or replace the client for ``provider.provider_type``."""
        self._providers[provider.provider_type] = provider

    def get(self, provider_type: ProviderType) -> ProviderClient:
        """Return the client for a provider type.

        Raises:
            ProviderError: If no client is registered for the type
        """
        try:
            return self._providers[provider_type]
        except KeyError:
            raise ProviderError(f"No provider registered for {provider_type}")

    def __contains__(self, provider_type: object) -> bool:
        return provider_type in self._providers

    def __iter__(self) -> Iterator[ProviderClient]:
        return iter(self._providers.values())


def create_provider_registry(
    settings: Settings,
    logger: Optional[structlog.BoundLogger] = None,
) -> ProviderRegistry:
    """Build the default registry from configured credentials.

    Args:
        settings: Application settings holding the provider API keys
        logger: Logger handed to every provider

    Returns:
        Registry with Anthropic and Google providers
    """
    return ProviderRegistry(
        [
            AnthropicProvider(
                api_key=settings.anthropic_api_key,
                max_tokens=settings.max_output_tokens,
                logger=logger,
            ),
            GoogleProvider(
                api_key=settings.google_api_key,
                max_tokens=settings.max_output_tokens,
                logger=logger,
            ),
        ]
    )
