"""File-system document store for uploads, metadata sidecars and translations."""

import os
import uuid
from pathlib import Path
from typing import Optional, Tuple

import structlog
from pydantic import ValidationError

from transtudio.core.errors import NotFoundError, StorageError
from transtudio.core.processor import file_extension
from transtudio.core.types import DocumentRecord, StoredDocument, TranslationArtifact
from transtudio.utils.logging import get_logger

ARTIFACT_SUFFIX = ".translation.txt"


def _is_document_id(value: str) -> bool:
    try:
        return str(uuid.UUID(value)) == value
    except (ValueError, AttributeError, TypeError):
        return False


class DocumentStore:
    """Owns the on-disk representation of documents and their translations.

    Layout inside ``root``::

        <id><ext>               uploaded source bytes
        <id>.json               DocumentRecord sidecar
        <id>.translation.txt    latest translation artifact
    """

    def __init__(
        self,
        root: Path,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """Initialize the store.

        Args:
            root: Directory holding every stored file. Created on first write.
            logger: Logger to report through. Defaults to the module logger.
        """
        self.root = Path(root)
        self._logger = logger or get_logger(__name__)

    def _ensure_root(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create upload directory {self.root}: {e}") from e

    def metadata_path(self, document_id: str) -> Path:
        """Path of the metadata sidecar for a document."""
        return self.root / f"{document_id}.json"

    def artifact_path(self, document_id: str) -> Path:
        """Path where the translation artifact of a document is written."""
        return self.root / f"{document_id}{ARTIFACT_SUFFIX}"

    def _write_atomic(self, path: Path, data: bytes) -> None:
        # Readers either see the previous file or the new one, never a torn write
        temp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            temp_path.write_bytes(data)
            os.replace(temp_path, path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {path}: {e}") from e

    async def store(
        self,
        data: bytes,
        original_name: str,
        mime_type: Optional[str],
    ) -> StoredDocument:
        """Write uploaded bytes under a freshly generated document id.

        Args:
            data: Raw file content
            original_name: File name as supplied by the client
            mime_type: Declared content type, if any

        Returns:
            Description of the stored file

        Raises:
            StorageError: If the bytes cannot be written
        """
        self._ensure_root()

        document_id = str(uuid.uuid4())
        extension = file_extension(original_name)
        path = (self.root / f"{document_id}{extension}").resolve()
        try:
            self._write_atomic(path, data)
        except StorageError as e:
            self._logger.error(
                "Failed to store document", path=str(path), error=str(e)
            )
            raise

        stored = StoredDocument(
            id=document_id,
            name=original_name,
            size=len(data),
            path=path,
            extension=extension,
            mime_type=mime_type,
        )
        self._logger.debug("document stored", document_id=document_id, size=stored.size)
        return stored

    async def discard(self, stored: StoredDocument) -> None:
        """Remove an upload whose metadata was never written.

        Failures are logged only; the caller is already reporting an error.
        """
        try:
            stored.path.unlink(missing_ok=True)
        except OSError as e:
            self._logger.warning(
                "Failed to remove orphaned document",
                document_id=stored.id,
                path=str(stored.path),
                error=str(e),
            )
            return
        self._logger.debug("orphaned document removed", document_id=stored.id)

    async def persist_metadata(self, record: DocumentRecord) -> DocumentRecord:
        """Write the sidecar for ``record``, replacing any previous version.

        Raises:
            StorageError: If the sidecar cannot be written
        """
        self._ensure_root()
        payload = record.model_dump_json(indent=2).encode("utf-8")
        self._write_atomic(self.metadata_path(record.document_id), payload)
        return record

    async def read_metadata(self, document_id: str) -> Optional[DocumentRecord]:
        """Load the sidecar for a document.

        Returns:
            The record, or None if the id is malformed, unknown, or the
            sidecar is unreadable
        """
        if not _is_document_id(document_id):
            return None

        path = self.metadata_path(document_id)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            self._logger.warning(
                "Unreadable document metadata", document_id=document_id, error=str(e)
            )
            return None

        try:
            return DocumentRecord.model_validate_json(raw)
        except ValidationError as e:
            self._logger.warning(
                "Invalid document metadata", document_id=document_id, error=str(e)
            )
            return None

    async def read_source(self, record: DocumentRecord) -> bytes:
        """Read the uploaded bytes referenced by ``record``.

        Raises:
            NotFoundError: If the source file no longer exists
            StorageError: If the file exists but cannot be read
        """
        try:
            return record.source_path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError("Document metadata missing.") from e
        except OSError as e:
            raise StorageError(f"Failed to read document source: {e}") from e

    async def persist_artifact(
        self,
        document_id: str,
        data: bytes,
        name: str,
        mime_type: str = "text/plain",
    ) -> TranslationArtifact:
        """Write translated bytes and point the document sidecar at them.

        A later call for the same document overwrites both the file and the
        reference; only the latest translation is kept.

        Raises:
            NotFoundError: If the document has no metadata
            StorageError: If either write fails
        """
        record = await self.read_metadata(document_id)
        if record is None:
            raise NotFoundError("Document metadata missing.")

        path = self.artifact_path(document_id).resolve()
        self._write_atomic(path, data)

        artifact = TranslationArtifact(
            document_id=document_id,
            path=path,
            mime_type=mime_type,
            name=name,
        )
        await self.persist_metadata(record.model_copy(update={"translation": artifact}))
        self._logger.debug(
            "translation artifact stored", document_id=document_id, size=len(data)
        )
        return artifact

    async def read_artifact(self, document_id: str) -> Tuple[TranslationArtifact, bytes]:
        """Load the latest translation of a document.

        Raises:
            NotFoundError: If there is no translation for the document
            StorageError: If the artifact exists but cannot be read
        """
        record = await self.read_metadata(document_id)
        if record is None or record.translation is None:
            raise NotFoundError("Translated document not found.")

        artifact = record.translation
        try:
            return artifact, artifact.path.read_bytes()
        except FileNotFoundError as e:
            raise NotFoundError("Translated document not found.") from e
        except OSError as e:
            raise StorageError(f"Failed to read translated document: {e}") from e
