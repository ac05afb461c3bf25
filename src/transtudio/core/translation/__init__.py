"""Translation engine for Transtudio."""

from transtudio.core.translation.estimator import TokenEstimator
from transtudio.core.translation.interface import ProviderClient, TranslationPrompt
from transtudio.core.translation.orchestrator import (
    FragmentEvent,
    SummaryEvent,
    TranslationEvent,
    TranslationOrchestrator,
    TranslationRun,
    TranslationState,
)
from transtudio.core.translation.providers import (
    AnthropicProvider,
    GoogleProvider,
    ProviderRegistry,
    create_provider_registry,
)
from transtudio.core.translation.summary import SummaryReporter

__all__ = [
    "AnthropicProvider",
    "FragmentEvent",
    "GoogleProvider",
    "ProviderClient",
    "ProviderRegistry",
    "SummaryEvent",
    "SummaryReporter",
    "TokenEstimator",
    "TranslationEvent",
    "TranslationOrchestrator",
    "TranslationPrompt",
    "TranslationRun",
    "TranslationState",
    "create_provider_registry",
]
