"""Static catalog of translation-capable models.

Prices are USD per million tokens. Adding, removing or repricing a model is a
deployment change: edit ``MODEL_CATALOG`` and release.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from transtudio.core.errors import UserInputError
from transtudio.core.types import ModelEntry, ProviderType

MODEL_CATALOG: Tuple[ModelEntry, ...] = (
    ModelEntry(
        id="claude-haiku-4-5",
        label="Claude Haiku 4.5",
        provider="Anthropic",
        provider_type=ProviderType.ANTHROPIC,
        description=(
            "Low-latency translator tuned for real-time workflows; "
            "retains safety guardrails while staying economical."
        ),
        context_window="Up to 200K tokens (Haiku tier)",
        input_price_per_million=1.0,
        output_price_per_million=5.0,
        provider_model_id="claude-haiku-4-5",
    ),
    ModelEntry(
        id="claude-sonnet-4-5",
        label="Claude Sonnet 4.5",
        provider="Anthropic",
        provider_type=ProviderType.ANTHROPIC,
        description=(
            "High-capacity model with a 1M-token context window when run via "
            "the API; best for large, nuanced docs."
        ),
        context_window="Up to 200K tokens in default tier (1M for API beta)",
        input_price_per_million=3.0,
        output_price_per_million=15.0,
        provider_model_id="claude-sonnet-4-5",
    ),
    ModelEntry(
        id="claude-opus-4-5",
        label="Claude Opus 4.5",
        provider="Anthropic",
        provider_type=ProviderType.ANTHROPIC,
        description=(
            "Top-tier reasoning model; designed for work where fidelity and "
            "context matter most."
        ),
        context_window="Up to 1M tokens",
        input_price_per_million=5.0,
        output_price_per_million=25.0,
        provider_model_id="claude-opus-4-5",
    ),
    ModelEntry(
        id="gemini-2.5-flash",
        label="Gemini 2.5 Flash",
        provider="Google",
        provider_type=ProviderType.GOOGLE,
        description=(
            "Hybrid reasoning model with a 1M-token context window, affordable "
            "for document translation and analysis."
        ),
        context_window="1M tokens",
        input_price_per_million=0.3,
        output_price_per_million=2.5,
        provider_model_id="gemini-2.5-flash",
    ),
    ModelEntry(
        id="gemini-3-flash",
        label="Gemini 3 Flash Preview",
        provider="Google",
        provider_type=ProviderType.GOOGLE,
        description=(
            "Frontier-level reasoning tuned for speed, with token costs "
            "optimized for high-frequency translation streams."
        ),
        context_window="Preview (1M+ tokens)",
        input_price_per_million=0.5,
        output_price_per_million=3.0,
        provider_model_id="gemini-3-flash",
    ),
    ModelEntry(
        id="gemini-3-pro",
        label="Gemini 3 Pro Preview",
        provider="Google",
        provider_type=ProviderType.GOOGLE,
        description=(
            "High-performance reasoning that trades higher cost for the most "
            "accurate, pro-level responses."
        ),
        context_window="Preview (1M+ tokens)",
        input_price_per_million=2.0,
        output_price_per_million=12.0,
        provider_model_id="gemini-3-pro",
    ),
)

_MODEL_LOOKUP: Mapping[str, ModelEntry] = MappingProxyType(
    {entry.id: entry for entry in MODEL_CATALOG}
)


def get_model(model_id: Optional[str]) -> Optional[ModelEntry]:
    """Look up a catalog entry by id.

    Args:
        model_id: Catalog identifier, e.g. 'claude-haiku-4-5'

    Returns:
        The entry, or None if the id is unknown
    """
    if not model_id:
        return None
    return _MODEL_LOOKUP.get(model_id)


def require_model(model_id: Optional[str]) -> ModelEntry:
    """Look up a catalog entry, treating a miss as a caller error.

    Raises:
        UserInputError: If the id is missing or not in the catalog
    """
    model = get_model(model_id)
    if model is None:
        raise UserInputError("Unknown model selected.")
    return model


def list_models() -> Tuple[ModelEntry, ...]:
    """Return all catalog entries in display order."""
    return MODEL_CATALOG
