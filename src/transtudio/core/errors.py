"""Error taxonomy for the translation pipeline.

Each error carries the HTTP-style status class an outer layer should answer
with, and a ``public_message`` that is safe to show to the caller verbatim.
Provider and storage details stay in the chained exception and the logs.
"""

from typing import Optional


class TranslationStudioError(Exception):
    """Base class for all Transtudio errors."""

    status_code: int = 500
    default_public_message: str = "Unable to process the request."

    def __init__(self, message: str, *, public_message: Optional[str] = None) -> None:
        super().__init__(message)
        self.public_message = public_message or self.default_public_message


class UserInputError(TranslationStudioError):
    """Invalid or missing input supplied by the caller (400-class)."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message, public_message=message)


class NotFoundError(TranslationStudioError):
    """A document or translation artifact does not exist (404-class)."""

    status_code = 404

    def __init__(self, message: str) -> None:
        super().__init__(message, public_message=message)


class ProviderError(TranslationStudioError):
    """A remote model provider failed or is not usable."""

    default_public_message = "Unable to translate document."


class MissingCredentialError(ProviderError):
    """The credential required by a provider is not configured."""

    pass


class StorageError(TranslationStudioError):
    """Reading from or writing to the document store failed."""

    default_public_message = "Unable to access document storage."
