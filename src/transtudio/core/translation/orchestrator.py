"""Streaming translation of stored documents.

A translation request is a :class:`TranslationRun` that moves through

    RECEIVED -> LOADED -> STREAMING -> COMPLETED

and ends in FAILED as soon as a precondition fails, the provider errors, or
the consumer goes away. Validation and loading happen in
:meth:`TranslationOrchestrator.start`, so bad input is reported before any
output is streamed. :meth:`TranslationRun.stream` then forwards provider
fragments to the caller while keeping a copy, and finishes with a single
:class:`SummaryEvent`.
"""

import asyncio
import time
from contextlib import aclosing
from enum import Enum
from pathlib import PurePath
from typing import AsyncIterator, List, Literal, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict

from transtudio.config import Settings, get_settings
from transtudio.core.catalog import require_model
from transtudio.core.errors import (
    NotFoundError,
    ProviderError,
    TranslationStudioError,
    UserInputError,
)
from transtudio.core.processor import count_pages, decode_text
from transtudio.core.storage import DocumentStore
from transtudio.core.translation.estimator import TokenEstimator
from transtudio.core.translation.prompts import build_translation_prompt
from transtudio.core.translation.providers import ProviderRegistry
from transtudio.core.translation.summary import SummaryReporter
from transtudio.core.types import (
    DocumentRecord,
    ModelEntry,
    TranslationArtifact,
    TranslationSummary,
)
from transtudio.utils.language import LanguageError, TargetLanguage, normalize_language
from transtudio.utils.logging import get_logger

TRANSLATION_MIME_TYPE = "text/plain"


class TranslationState(str, Enum):
    """Lifecycle states of a translation run."""

    RECEIVED = "received"
    LOADED = "loaded"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


class FragmentEvent(BaseModel):
    """A piece of translated text, delivered as soon as it is generated."""

    type: Literal["fragment"] = "fragment"
    text: str

    model_config = ConfigDict(frozen=True)


class SummaryEvent(BaseModel):
    """Final event of a successful run; nothing follows it."""

    type: Literal["summary"] = "summary"
    summary: TranslationSummary

    model_config = ConfigDict(frozen=True)


TranslationEvent = Union[FragmentEvent, SummaryEvent]


def artifact_name(record: DocumentRecord, target_language: TargetLanguage) -> str:
    """File name for a translation: source stem plus a language suffix."""
    base = PurePath(record.name).stem if record.name else ""
    if not base:
        base = f"translation-{record.document_id}"
    return f"{base}-{target_language.value}.txt"


class TranslationRun:
    """One translation request against one stored document."""

    def __init__(
        self,
        orchestrator: "TranslationOrchestrator",
        document_id: Optional[str],
        model_id: Optional[str],
        target_language: Union[TargetLanguage, str, None] = None,
    ) -> None:
        self._orchestrator = orchestrator
        self.document_id = document_id
        self.model_id = model_id
        self._requested_language = target_language
        self._logger = orchestrator._logger.bind(
            document_id=document_id, model_id=model_id
        )

        self.state = TranslationState.RECEIVED
        self.model: Optional[ModelEntry] = None
        self.record: Optional[DocumentRecord] = None
        self.target_language: Optional[TargetLanguage] = None
        self.source_text: Optional[str] = None
        self.page_count: Optional[int] = None

        self.cancelled = False
        self.translation: Optional[str] = None
        self.artifact: Optional[TranslationArtifact] = None
        self.summary: Optional[TranslationSummary] = None

    def _transition(self, state: TranslationState) -> None:
        self._logger.debug(
            "translation state changed", previous=self.state.value, state=state.value
        )
        self.state = state

    def _resolve_language(
        self, value: Union[TargetLanguage, str, None]
    ) -> Optional[TargetLanguage]:
        if value is None or value == "":
            return None
        try:
            return normalize_language(value)
        except LanguageError as e:
            raise UserInputError(str(e)) from e

    async def load(self) -> None:
        """Validate the request and read the source document.

        Raises:
            UserInputError: Missing ids, unknown model, unsupported language
            NotFoundError: The document or its source file does not exist
            StorageError: The source file cannot be read
        """
        store = self._orchestrator.store
        try:
            if not self.document_id or not self.model_id:
                raise UserInputError("Missing document or model selection.")
            self.model = require_model(self.model_id)
            requested = self._resolve_language(self._requested_language)

            record = await store.read_metadata(self.document_id)
            if record is None:
                raise NotFoundError("Document metadata missing.")
            source = await store.read_source(record)

            self.record = record
            self.source_text = decode_text(source)
            self.page_count = record.page_count or count_pages(self.source_text)
            self.target_language = (
                requested
                or record.target_language
                or self._orchestrator.settings.default_target_language
            )
        except (UserInputError, NotFoundError) as e:
            self._logger.info("translation rejected", reason=str(e))
            self._transition(TranslationState.FAILED)
            raise
        except TranslationStudioError:
            self._logger.error("failed to load document for translation", exc_info=True)
            self._transition(TranslationState.FAILED)
            raise

        self._transition(TranslationState.LOADED)

    async def stream(self) -> AsyncIterator[TranslationEvent]:
        """Translate the loaded document, yielding events as they arrive.

        Yields:
            FragmentEvent for every provider fragment, then one SummaryEvent

        Raises:
            ProviderError: If generation fails; the run ends FAILED
            RuntimeError: If the run was not loaded or was already streamed
        """
        if self.state is not TranslationState.LOADED:
            raise RuntimeError(f"Cannot stream a translation run in state {self.state.value}")

        orchestrator = self._orchestrator
        chunks: List[str] = []
        started = time.monotonic()
        self._transition(TranslationState.STREAMING)

        try:
            provider = orchestrator.registry.get(self.model.provider_type)
            prompt = build_translation_prompt(
                self.target_language,
                self.source_text,
                temperature=orchestrator.settings.translation_temperature,
            )
            async with aclosing(
                provider.generate_stream(self.model.provider_model_id, prompt)
            ) as fragments:
                async for fragment in fragments:
                    chunks.append(fragment)
                    yield FragmentEvent(text=fragment)

            summary = await self._complete("".join(chunks), started)
        except (asyncio.CancelledError, GeneratorExit):
            # Partial output is dropped; nothing is persisted for this run
            self.cancelled = True
            self._logger.info("translation cancelled", fragments=len(chunks))
            self._transition(TranslationState.FAILED)
            raise
        except Exception as e:
            self._logger.error("translation failed", exc_info=True)
            self._transition(TranslationState.FAILED)
            if isinstance(e, ProviderError):
                raise
            raise ProviderError(f"Translation failed: {str(e)}") from e

        yield SummaryEvent(summary=summary)

    async def _complete(self, translation: str, started: float) -> TranslationSummary:
        orchestrator = self._orchestrator

        input_tokens = await orchestrator.estimator.estimate(self.model, self.source_text)
        output_tokens = await orchestrator.estimator.estimate(self.model, translation)
        duration_ms = int((time.monotonic() - started) * 1000)

        self.translation = translation
        await self._persist_artifact(translation)

        summary = orchestrator.reporter.build(
            model=self.model,
            target_language=self.target_language,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            duration_ms=duration_ms,
            page_count=self.page_count,
        )
        orchestrator.reporter.emit(
            summary, document_id=self.document_id, model_id=self.model.id
        )
        self.summary = summary
        self._transition(TranslationState.COMPLETED)
        return summary

    async def _persist_artifact(self, translation: str) -> None:
        # The caller already has the streamed text, so a failed write is logged only
        try:
            self.artifact = await self._orchestrator.store.persist_artifact(
                self.document_id,
                translation.encode("utf-8"),
                artifact_name(self.record, self.target_language),
                TRANSLATION_MIME_TYPE,
            )
        except Exception:
            self._logger.error("failed to persist translated document", exc_info=True)


class TranslationOrchestrator:
    """Runs translations of stored documents through the selected provider."""

    def __init__(
        self,
        store: DocumentStore,
        registry: ProviderRegistry,
        estimator: Optional[TokenEstimator] = None,
        reporter: Optional[SummaryReporter] = None,
        settings: Optional[Settings] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            store: Document store holding sources and receiving artifacts
            registry: Provider clients keyed by provider type
            estimator: Token estimator. Defaults to one over ``registry``.
            reporter: Summary reporter. Defaults to a new reporter.
            settings: Application settings. Defaults to the process settings.
            logger: Logger to report through. Defaults to the module logger.
        """
        self._logger = logger or get_logger(__name__)
        self.store = store
        self.registry = registry
        self.estimator = estimator or TokenEstimator(registry, logger=self._logger)
        self.reporter = reporter or SummaryReporter(logger=self._logger)
        self.settings = settings or get_settings()

    async def start(
        self,
        document_id: Optional[str],
        model_id: Optional[str],
        target_language: Union[TargetLanguage, str, None] = None,
    ) -> TranslationRun:
        """Validate a request and load its document.

        Args:
            document_id: Identifier returned by the upload
            model_id: Catalog id of the model to translate with
            target_language: Target language; defaults to the one stored
                with the document

        Returns:
            A run in the LOADED state, ready to :meth:`TranslationRun.stream`

        Raises:
            UserInputError: Missing ids, unknown model, unsupported language
            NotFoundError: Unknown document
            StorageError: The source file cannot be read
        """
        run = TranslationRun(self, document_id, model_id, target_language)
        await run.load()
        return run
