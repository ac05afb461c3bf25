"""Core data types for the Transtudio translation pipeline."""

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from transtudio.utils.language import TargetLanguage


class ProviderType(str, Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"  # Claude models
    GOOGLE = "google"  # Gemini models


class ModelEntry(BaseModel):
    """A translation-capable model offered by the catalog."""

    id: str
    label: str
    provider: str = Field(description="Display name of the vendor")
    provider_type: ProviderType
    description: str = ""
    context_window: Optional[str] = None
    input_price_per_million: float = Field(ge=0.0)
    output_price_per_million: float = Field(ge=0.0)
    provider_model_id: str = Field(
        description="Opaque identifier passed to the provider API",
    )

    model_config = ConfigDict(frozen=True, protected_namespaces=())


class StoredDocument(BaseModel):
    """Result of writing uploaded bytes to the document store."""

    id: str
    name: str
    size: int = Field(ge=0)
    path: Path
    extension: str
    mime_type: Optional[str] = None
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(frozen=True)


class TranslationArtifact(BaseModel):
    """The persisted output of a successful translation run."""

    document_id: str
    path: Path
    mime_type: str = "text/plain"
    name: str

    model_config = ConfigDict(frozen=True)


class DocumentRecord(BaseModel):
    """Metadata sidecar describing an uploaded source document."""

    document_id: str
    source_path: Path
    name: Optional[str] = None
    mime_type: Optional[str] = None
    extension: str = ".txt"
    size: int = Field(default=0, ge=0)
    uploaded_at: Optional[datetime] = None
    target_language: Optional[TargetLanguage] = None
    model_id: Optional[str] = None
    estimated_tokens: Optional[int] = Field(default=None, ge=0)
    estimated_cost: Optional[float] = Field(default=None, ge=0.0)
    page_count: Optional[int] = Field(default=None, ge=1)
    translation: Optional[TranslationArtifact] = None

    model_config = ConfigDict(frozen=True, protected_namespaces=())


class TranslationSummary(BaseModel):
    """Usage, cost and timing of one completed translation run."""

    input_tokens: int = Field(ge=0)
    output_tokens: int = Field(ge=0)
    cost: float = Field(ge=0.0)
    duration_ms: int = Field(ge=0)
    page_count: int = Field(ge=1)
    model_label: str
    target_language: TargetLanguage

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape streamed to clients."""
        return {
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
            "cost": self.cost,
            "durationMs": self.duration_ms,
            "pages": self.page_count,
            "model": self.model_label,
            "targetLanguage": self.target_language.value,
        }
