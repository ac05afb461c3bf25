"""LiteLLM-based streaming generation shared by the concrete providers."""

from typing import AsyncIterator, Optional

import structlog
from litellm import acompletion

from transtudio.core.errors import MissingCredentialError, ProviderError
from transtudio.core.translation.interface import TranslationPrompt
from transtudio.utils.logging import get_logger


class LiteLLMProvider:
    """Streams completions through LiteLLM.

    Subclasses set ``litellm_prefix`` (the LiteLLM routing prefix, e.g.
    'anthropic') and implement token counting with the vendor SDK.
    """

    litellm_prefix: str = ""
    credential_name: str = "API key"

    def __init__(
        self,
        api_key: Optional[str] = None,
        max_tokens: int = 64000,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: Provider credential. Generation fails cleanly without it.
            max_tokens: Maximum tokens in a response. Defaults to 64000.
            logger: Logger to report through. Defaults to the module logger.
        """
        self._api_key = api_key or None
        self.max_tokens = max_tokens
        self._logger = logger or get_logger(__name__)

    @property
    def has_credentials(self) -> bool:
        return self._api_key is not None

    def _get_model_string(self, provider_model_id: str) -> str:
        """Get the model string for LiteLLM.

        Args:
            provider_model_id: Model identifier from the catalog

        Returns:
            Model string for LiteLLM
        """
        # If model name already includes provider prefix, use it directly
        if "/" in provider_model_id:
            return provider_model_id
        return f"{self.litellm_prefix}/{provider_model_id}"

    async def generate_stream(
        self,
        provider_model_id: str,
        prompt: TranslationPrompt,
    ) -> AsyncIterator[str]:
        """Stream a completion as text fragments.

        Args:
            provider_model_id: Model identifier from the catalog
            prompt: System and user messages plus sampling temperature

        Yields:
            Non-empty text fragments in the order the provider produced them

        Raises:
            MissingCredentialError: If no credential is configured
            ProviderError: If the request or the stream fails
        """
        if not self.has_credentials:
            raise MissingCredentialError(
                f"{self.credential_name} is not configured for {self.litellm_prefix}"
            )

        model = self._get_model_string(provider_model_id)
        self._logger.debug("Starting completion stream", model=model)

        try:
            response = await acompletion(
                model=model,
                messages=[
                    {"role": "system", "content": prompt.system},
                    {"role": "user", "content": prompt.user},
                ],
                temperature=prompt.temperature,
                max_tokens=self.max_tokens,
                stream=True,
                api_key=self._api_key,
                drop_params=True,
            )
        except Exception as e:
            raise ProviderError(f"Completion request failed: {str(e)}") from e

        try:
            async for chunk in response:
                if chunk.choices and chunk.choices[0].delta.content:
                    yield chunk.choices[0].delta.content
        except Exception as e:
            raise ProviderError(f"Completion stream failed: {str(e)}") from e
        finally:
            # Releases the HTTP stream when the consumer stops early
            close = getattr(response, "aclose", None)
            if close is not None:
                await close()
