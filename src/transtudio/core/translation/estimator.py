"""Provider-agnostic token estimation."""

from typing import Optional

import structlog

from transtudio.core.translation.prompts import TRANSLATION_SYSTEM_PROMPT
from transtudio.core.translation.providers import ProviderRegistry
from transtudio.core.types import ModelEntry
from transtudio.utils.logging import get_logger


class TokenEstimator:
    """Counts tokens with the provider that serves a catalog model.

    Estimation never fails the caller: a missing credential or a failing
    remote call yields 0, which means "unknown" rather than "free".
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        system_prompt: str = TRANSLATION_SYSTEM_PROMPT,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        self.registry = registry
        self.system_prompt = system_prompt
        self._logger = logger or get_logger(__name__)

    async def estimate(self, model: ModelEntry, text: str) -> int:
        """Estimate the tokens ``text`` costs for ``model``.

        Args:
            model: Catalog entry selecting the provider and its model id
            text: Text to count

        Returns:
            Token count, or 0 when it cannot be determined
        """
        if not text:
            return 0

        try:
            provider = self.registry.get(model.provider_type)
            tokens = await provider.count_tokens(
                model.provider_model_id, text, self.system_prompt
            )
        except Exception as e:
            self._logger.debug(
                "token estimation failed",
                model_id=model.id,
                provider=model.provider_type.value,
                error=str(e),
            )
            return 0

        if tokens is None:
            self._logger.debug(
                "token estimation skipped, provider credential missing",
                model_id=model.id,
                provider=model.provider_type.value,
            )
            return 0
        return tokens
