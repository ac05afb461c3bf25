"""Validation and decoding of uploaded plain-text documents."""

import math
from pathlib import PurePath
from typing import Optional

from transtudio.core.errors import UserInputError
from transtudio.utils.logging import get_logger

logger = get_logger(__name__)

CHARS_PER_PAGE = 2000
TEXT_MIME_TYPE = "text/plain"
TEXT_EXTENSION = ".txt"


def is_text_upload(file_name: Optional[str], mime_type: Optional[str]) -> bool:
    """Check whether an upload is a plain-text document.

    Either the declared content type or the file suffix is enough.
    """
    if mime_type and mime_type.split(";", 1)[0].strip().lower() == TEXT_MIME_TYPE:
        return True
    return bool(file_name) and file_name.lower().endswith(TEXT_EXTENSION)


def file_extension(file_name: Optional[str]) -> str:
    """Return the lower-cased final suffix of a file name, or '.txt'."""
    suffix = PurePath(file_name or "").suffix.lower()
    return suffix or TEXT_EXTENSION


def decode_text(data: bytes) -> str:
    """Decode uploaded bytes as UTF-8, tolerating a byte-order mark.

    Raises:
        UserInputError: If the bytes are not valid UTF-8
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.debug("Rejected upload with invalid UTF-8", error=str(e))
        raise UserInputError("File is not valid UTF-8 encoded text.") from e


def count_pages(text: str) -> int:
    """Number of 2000-character pages in ``text``, at least one."""
    return max(1, math.ceil(len(text) / CHARS_PER_PAGE))
