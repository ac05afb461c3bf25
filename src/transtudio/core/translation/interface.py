"""Provider interface definitions."""

from typing import AsyncIterator, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from transtudio.core.types import ProviderType


class TranslationPrompt(BaseModel):
    """The two messages sent to a provider for one translation request."""

    system: str
    user: str
    temperature: float = Field(default=0.1, ge=0.0, le=2.0)

    model_config = ConfigDict(frozen=True)


@runtime_checkable
class ProviderClient(Protocol):
    """Capabilities every model provider must offer."""

    @property
    def provider_type(self) -> ProviderType:
        """The provider this client talks to."""
        ...

    @property
    def has_credentials(self) -> bool:
        """Whether the credential needed to reach the provider is configured."""
        ...

    async def count_tokens(
        self,
        provider_model_id: str,
        text: str,
        system_prompt: str,
    ) -> Optional[int]:
        """Count the input tokens ``text`` would cost under ``system_prompt``.

        Args:
            provider_model_id: Model identifier understood by the provider
            text: User content to count
            system_prompt: System instruction sent alongside the content

        Returns:
            Token count, or None if the provider cannot be asked (no credential)
        """
        ...

    def generate_stream(
        self,
        provider_model_id: str,
        prompt: TranslationPrompt,
    ) -> AsyncIterator[str]:
        """Generate a completion as a lazy sequence of text fragments.

        Closing the returned iterator aborts the in-flight remote call.

        Raises:
            MissingCredentialError: If no credential is configured
            ProviderError: If the remote call fails
        """
        ...
