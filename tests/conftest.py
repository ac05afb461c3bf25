"""Shared fixtures: isolated settings, a temporary store and fake providers."""

import asyncio
from typing import AsyncIterator, Callable, List, Optional, Sequence, Tuple

import pytest

from transtudio.config import Settings
from transtudio.core.storage import DocumentStore
from transtudio.core.translation.interface import TranslationPrompt
from transtudio.core.translation.providers import ProviderRegistry
from transtudio.core.types import ProviderType


class FakeProvider:
    """In-memory provider client; counts one token per four characters."""

    def __init__(
        self,
        provider_type: ProviderType,
        fragments: Sequence[str] = ("Hello", ", ", "world"),
        *,
        has_credentials: bool = True,
        count_error: Optional[Exception] = None,
        fail_after: Optional[int] = None,
        error: Optional[Exception] = None,
        block_after: Optional[int] = None,
    ) -> None:
        self.provider_type = provider_type
        self.fragments = list(fragments)
        self.has_credentials = has_credentials
        self.count_error = count_error
        self.fail_after = fail_after
        self.error = error or RuntimeError("provider exploded")
        self.block_after = block_after

        self.count_calls: List[Tuple[str, str, str]] = []
        self.generate_calls: List[Tuple[str, TranslationPrompt]] = []
        self.closed = False

    async def count_tokens(
        self, provider_model_id: str, text: str, system_prompt: str
    ) -> Optional[int]:
        self.count_calls.append((provider_model_id, text, system_prompt))
        if self.count_error is not None:
            raise self.count_error
        if not self.has_credentials:
            return None
        return max(1, len(text) // 4)

    async def generate_stream(
        self, provider_model_id: str, prompt: TranslationPrompt
    ) -> AsyncIterator[str]:
        self.generate_calls.append((provider_model_id, prompt))
        try:
            for index, fragment in enumerate(self.fragments):
                if self.fail_after is not None and index == self.fail_after:
                    raise self.error
                if self.block_after is not None and index == self.block_after:
                    await asyncio.Event().wait()
                await asyncio.sleep(0)
                yield fragment
        finally:
            self.closed = True


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        upload_dir=tmp_path / "uploads",
        anthropic_api_key=None,
        google_api_key=None,
    )


@pytest.fixture
def store(settings) -> DocumentStore:
    return DocumentStore(settings.upload_dir)


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    """Factory for fake providers, defaulting to the Anthropic slot."""

    def _make(provider_type: ProviderType = ProviderType.ANTHROPIC, *args, **kwargs):
        return FakeProvider(provider_type, *args, **kwargs)

    return _make


@pytest.fixture
def anthropic_provider(make_provider) -> FakeProvider:
    return make_provider(ProviderType.ANTHROPIC)


@pytest.fixture
def google_provider(make_provider) -> FakeProvider:
    return make_provider(ProviderType.GOOGLE, ["Bonjour"])


@pytest.fixture
def registry(anthropic_provider, google_provider) -> ProviderRegistry:
    return ProviderRegistry([anthropic_provider, google_provider])
