"""Request-level operations exposed to an outer transport (HTTP, CLI)."""

from typing import Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from transtudio.config import Settings, get_settings
from transtudio.core.catalog import require_model
from transtudio.core.cost import estimate_cost
from transtudio.core.errors import NotFoundError, StorageError, UserInputError
from transtudio.core.processor import count_pages, decode_text, is_text_upload
from transtudio.core.storage import DocumentStore
from transtudio.core.translation.estimator import TokenEstimator
from transtudio.core.translation.orchestrator import (
    TranslationOrchestrator,
    TranslationRun,
)
from transtudio.core.translation.providers import (
    ProviderRegistry,
    create_provider_registry,
)
from transtudio.core.translation.summary import SummaryReporter
from transtudio.core.types import DocumentRecord, ModelEntry
from transtudio.utils.language import LanguageError, TargetLanguage, normalize_language
from transtudio.utils.logging import get_logger


class UploadResult(BaseModel):
    """Response to a successful upload."""

    document_id: str
    name: str
    size: int = Field(ge=0)
    page_count: int = Field(ge=1)
    estimated_tokens: int = Field(ge=0)
    estimated_cost: float = Field(ge=0.0)
    target_language: TargetLanguage
    model: ModelEntry
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    @property
    def model_id(self) -> str:
        return self.model.id


class EstimateResult(BaseModel):
    """Refreshed estimate for a stored document."""

    document_id: str
    estimated_tokens: int = Field(ge=0)
    estimated_cost: float = Field(ge=0.0)
    model: ModelEntry
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DownloadResult(BaseModel):
    """A translation artifact ready to be sent to the client."""

    name: str
    mime_type: str
    content: bytes

    model_config = ConfigDict(frozen=True)

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.name}"'


class TranslationStudio:
    """Upload, estimate, translate and download boundary operations."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[DocumentStore] = None,
        registry: Optional[ProviderRegistry] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """Wire the pipeline components together.

        Every collaborator can be injected; missing ones are built from
        ``settings``.
        """
        self.settings = settings or get_settings()
        self._logger = logger or get_logger(__name__)
        self.store = store or DocumentStore(self.settings.upload_dir, logger=self._logger)
        self.registry = registry or create_provider_registry(self.settings, logger=self._logger)
        self.estimator = TokenEstimator(self.registry, logger=self._logger)
        self.orchestrator = TranslationOrchestrator(
            store=self.store,
            registry=self.registry,
            estimator=self.estimator,
            reporter=SummaryReporter(logger=self._logger),
            settings=self.settings,
            logger=self._logger,
        )

    def _language(self, value: Union[TargetLanguage, str, None]) -> TargetLanguage:
        if value is None or value == "":
            return self.settings.default_target_language
        try:
            return normalize_language(value)
        except LanguageError as e:
            raise UserInputError(str(e)) from e

    async def upload(
        self,
        data: bytes,
        file_name: str,
        mime_type: Optional[str] = None,
        target_language: Union[TargetLanguage, str, None] = None,
        model_id: Optional[str] = None,
    ) -> UploadResult:
        """Store a plain-text document and price its translation.

        Args:
            data: Uploaded file content
            file_name: Original file name
            mime_type: Declared content type
            target_language: Language to translate into; defaults from settings
            model_id: Catalog model to estimate for; defaults from settings

        Returns:
            UploadResult with the new document id and estimate

        Raises:
            UserInputError: Non-text upload, too large, empty, bad language or model
            StorageError: The document could not be written
        """
        if not is_text_upload(file_name, mime_type):
            raise UserInputError("Only TXT uploads are supported.")
        if len(data) > self.settings.max_upload_bytes:
            raise UserInputError(
                f"File exceeds the {self.settings.max_upload_size_mb} MB upload limit."
            )
        text = decode_text(data)
        if not text.strip():
            raise UserInputError("Please upload a non-empty TXT file.")

        language = self._language(target_language)
        model = require_model(model_id or self.settings.default_model_id)

        page_count = count_pages(text)
        estimated_tokens = await self.estimator.estimate(model, text)
        estimate = estimate_cost(estimated_tokens, model)

        stored = await self.store.store(data, file_name, mime_type or "text/plain")
        try:
            await self.store.persist_metadata(
                DocumentRecord(
                    document_id=stored.id,
                    source_path=stored.path,
                    name=stored.name,
                    mime_type=stored.mime_type,
                    extension=stored.extension,
                    size=stored.size,
                    uploaded_at=stored.uploaded_at,
                    target_language=language,
                    model_id=model.id,
                    estimated_tokens=estimated_tokens,
                    estimated_cost=estimate.estimated_cost,
                    page_count=page_count,
                )
            )
        except StorageError:
            # Without a sidecar the source can never be reached again
            await self.store.discard(stored)
            raise

        self._logger.info(
            "document uploaded for translation",
            document_id=stored.id,
            model_id=model.id,
            target_language=language.value,
            page_count=page_count,
            estimated_tokens=estimated_tokens,
            estimated_cost=estimate.estimated_cost,
        )

        return UploadResult(
            document_id=stored.id,
            name=stored.name,
            size=stored.size,
            page_count=page_count,
            estimated_tokens=estimated_tokens,
            estimated_cost=estimate.estimated_cost,
            target_language=language,
            model=model,
            warnings=estimate.warnings,
        )

    async def estimate(self, document_id: Optional[str], model_id: Optional[str]) -> EstimateResult:
        """Re-estimate a stored document for a (possibly different) model.

        The stored metadata is left untouched.

        Raises:
            UserInputError: Missing ids or unknown model
            NotFoundError: Unknown document
            StorageError: The source file cannot be read
        """
        if not document_id or not model_id:
            raise UserInputError("Missing document or model selection.")

        record = await self.store.read_metadata(document_id)
        if record is None:
            raise NotFoundError("Document metadata missing.")
        model = require_model(model_id)

        text = decode_text(await self.store.read_source(record))
        estimated_tokens = await self.estimator.estimate(model, text)
        estimate = estimate_cost(estimated_tokens, model)

        self._logger.info(
            "re-estimated tokens for uploaded document",
            document_id=document_id,
            model_id=model.id,
            estimated_tokens=estimated_tokens,
            estimated_cost=estimate.estimated_cost,
        )

        return EstimateResult(
            document_id=document_id,
            estimated_tokens=estimated_tokens,
            estimated_cost=estimate.estimated_cost,
            model=model,
            warnings=estimate.warnings,
        )

    async def translate(
        self,
        document_id: Optional[str],
        model_id: Optional[str],
        target_language: Union[TargetLanguage, str, None] = None,
    ) -> TranslationRun:
        """Prepare a streaming translation; iterate ``run.stream()`` for output.

        Raises:
            UserInputError: Missing ids, unknown model, unsupported language
            NotFoundError: Unknown document
            StorageError: The source file cannot be read
        """
        return await self.orchestrator.start(document_id, model_id, target_language)

    async def download(self, document_id: Optional[str]) -> DownloadResult:
        """Fetch the latest translation of a document.

        Raises:
            UserInputError: Missing document id
            NotFoundError: No translation exists for the document
        """
        if not document_id:
            raise UserInputError("Missing document id.")

        artifact, content = await self.store.read_artifact(document_id)
        return DownloadResult(
            name=artifact.name,
            mime_type=artifact.mime_type,
            content=content,
        )
