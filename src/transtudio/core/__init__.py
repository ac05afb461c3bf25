"""Core functionality for Transtudio."""

from transtudio.core.catalog import MODEL_CATALOG, get_model, list_models, require_model
from transtudio.core.cost import (
    CostEstimate,
    CostLevel,
    combined_cost,
    estimate_cost,
    tokens_to_cost,
)
from transtudio.core.errors import (
    MissingCredentialError,
    NotFoundError,
    ProviderError,
    StorageError,
    TranslationStudioError,
    UserInputError,
)
from transtudio.core.service import (
    DownloadResult,
    EstimateResult,
    TranslationStudio,
    UploadResult,
)
from transtudio.core.storage import DocumentStore
from transtudio.core.types import (
    DocumentRecord,
    ModelEntry,
    ProviderType,
    StoredDocument,
    TranslationArtifact,
    TranslationSummary,
)

__all__ = [
    "MODEL_CATALOG",
    "CostEstimate",
    "CostLevel",
    "DocumentRecord",
    "DocumentStore",
    "DownloadResult",
    "EstimateResult",
    "MissingCredentialError",
    "ModelEntry",
    "NotFoundError",
    "ProviderError",
    "ProviderType",
    "StorageError",
    "StoredDocument",
    "TranslationArtifact",
    "TranslationStudio",
    "TranslationStudioError",
    "TranslationSummary",
    "UploadResult",
    "UserInputError",
    "combined_cost",
    "estimate_cost",
    "get_model",
    "list_models",
    "require_model",
    "tokens_to_cost",
]
