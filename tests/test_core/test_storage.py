"""Tests for the file-system document store."""

import uuid
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from transtudio.core.errors import NotFoundError, StorageError
from transtudio.core.storage import DocumentStore
from transtudio.core.types import DocumentRecord
from transtudio.utils.language import TargetLanguage


async def store_document(store: DocumentStore, text: str = "Hello world") -> DocumentRecord:
    stored = await store.store(text.encode("utf-8"), "notes.txt", "text/plain")
    record = DocumentRecord(
        document_id=stored.id,
        source_path=stored.path,
        name=stored.name,
        mime_type=stored.mime_type,
        extension=stored.extension,
        size=stored.size,
        uploaded_at=stored.uploaded_at,
        target_language=TargetLanguage.CHINESE_SIMPLIFIED,
        model_id="claude-haiku-4-5",
        estimated_tokens=3,
        estimated_cost=0.000018,
        page_count=1,
    )
    return await store.persist_metadata(record)


@pytest.mark.asyncio
async def test_store_writes_bytes_under_generated_id(store):
    stored = await store.store(b"Hello", "Notes.TXT", "text/plain")

    assert str(uuid.UUID(stored.id)) == stored.id
    assert stored.extension == ".txt"
    assert stored.path == (store.root / f"{stored.id}.txt").resolve()
    assert stored.path.read_bytes() == b"Hello"
    assert stored.size == 5
    assert stored.name == "Notes.TXT"


@pytest.mark.asyncio
async def test_store_generates_distinct_ids(store):
    first = await store.store(b"a", "a.txt", "text/plain")
    second = await store.store(b"a", "a.txt", "text/plain")
    assert first.id != second.id


@pytest.mark.asyncio
async def test_store_failure_raises_storage_error(store):
    with patch.object(Path, "write_bytes", side_effect=OSError("disk full")):
        with pytest.raises(StorageError):
            await store.store(b"Hello", "notes.txt", "text/plain")

    assert list(store.root.iterdir()) == []


@pytest.mark.asyncio
async def test_store_failure_leaves_no_partial_file(store):
    with patch("transtudio.core.storage.os.replace", side_effect=OSError("permission denied")):
        with pytest.raises(StorageError, match="permission denied"):
            await store.store(b"Hello", "notes.txt", "text/plain")

    assert list(store.root.iterdir()) == []


@pytest.mark.asyncio
async def test_discard_removes_source(store):
    stored = await store.store(b"Hello", "notes.txt", "text/plain")

    await store.discard(stored)
    await store.discard(stored)

    assert not stored.path.exists()


@pytest.mark.asyncio
async def test_discard_failure_is_logged(tmp_path):
    logger = MagicMock()
    store = DocumentStore(tmp_path / "uploads", logger=logger)
    stored = await store.store(b"Hello", "notes.txt", "text/plain")

    with patch.object(Path, "unlink", side_effect=OSError("busy")):
        await store.discard(stored)

    assert stored.path.exists()
    logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_metadata_round_trip(store):
    record = await store_document(store)

    loaded = await store.read_metadata(record.document_id)

    assert loaded == record
    assert store.metadata_path(record.document_id).exists()


@pytest.mark.asyncio
async def test_read_metadata_unknown_document(store):
    assert await store.read_metadata(str(uuid.uuid4())) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "document_id",
    ["", "not-a-uuid", "../etc/passwd", "../../uploads/x"],
)
async def test_read_metadata_rejects_malformed_ids(store, document_id):
    assert await store.read_metadata(document_id) is None


@pytest.mark.asyncio
async def test_read_metadata_invalid_sidecar(store):
    document_id = str(uuid.uuid4())
    store.root.mkdir(parents=True)
    store.metadata_path(document_id).write_text("{not json", encoding="utf-8")

    assert await store.read_metadata(document_id) is None


@pytest.mark.asyncio
async def test_read_source(store):
    record = await store_document(store, "Bonjour")
    assert await store.read_source(record) == b"Bonjour"


@pytest.mark.asyncio
async def test_read_source_missing_file(store):
    record = await store_document(store)
    record.source_path.unlink()

    with pytest.raises(NotFoundError):
        await store.read_source(record)


@pytest.mark.asyncio
async def test_persist_artifact_updates_sidecar(store):
    record = await store_document(store)

    artifact = await store.persist_artifact(
        record.document_id, "你好".encode("utf-8"), "notes-zh.txt"
    )

    assert artifact.name == "notes-zh.txt"
    assert artifact.mime_type == "text/plain"
    assert artifact.path.read_bytes() == "你好".encode("utf-8")

    loaded = await store.read_metadata(record.document_id)
    assert loaded.translation == artifact
    assert loaded.estimated_tokens == record.estimated_tokens


@pytest.mark.asyncio
async def test_persist_artifact_keeps_only_latest(store):
    record = await store_document(store)

    await store.persist_artifact(record.document_id, b"first", "notes-zh.txt")
    await store.persist_artifact(record.document_id, b"second", "notes-zh.txt")

    artifact, content = await store.read_artifact(record.document_id)
    assert content == b"second"
    assert artifact.name == "notes-zh.txt"
    leftovers = [p for p in store.root.iterdir() if p.name.endswith(".tmp")]
    assert leftovers == []


@pytest.mark.asyncio
async def test_persist_artifact_twice_with_same_content_is_idempotent(store):
    record = await store_document(store)

    await store.persist_artifact(record.document_id, b"same", "notes-en.txt")
    first = await store.read_metadata(record.document_id)
    await store.persist_artifact(record.document_id, b"same", "notes-en.txt")
    second = await store.read_metadata(record.document_id)

    assert first == second


@pytest.mark.asyncio
async def test_persist_artifact_unknown_document(store):
    with pytest.raises(NotFoundError):
        await store.persist_artifact(str(uuid.uuid4()), b"text", "x-en.txt")


@pytest.mark.asyncio
async def test_read_artifact_without_translation(store):
    record = await store_document(store)

    with pytest.raises(NotFoundError) as excinfo:
        await store.read_artifact(record.document_id)
    assert excinfo.value.public_message == "Translated document not found."


@pytest.mark.asyncio
async def test_read_artifact_unknown_document(store):
    with pytest.raises(NotFoundError):
        await store.read_artifact(str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_failed_sidecar_write_leaves_previous_version(store):
    record = await store_document(store)

    with patch("transtudio.core.storage.os.replace", side_effect=OSError("denied")):
        with pytest.raises(StorageError):
            await store.persist_metadata(record.model_copy(update={"page_count": 9}))

    loaded = await store.read_metadata(record.document_id)
    assert loaded.page_count == 1
    assert not [p for p in store.root.iterdir() if p.name.endswith(".tmp")]
