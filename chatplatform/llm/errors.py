"""Error taxonomy for provider result conversion."""

from __future__ import annotations

import typing as typ


class PlatformError(Exception):
    """Base exception with a structured error code.

    Attributes
    ----------
    code : str
        Machine-readable error code. Defaults to the class ``error_code``.
    message : str
        Human-readable message, passed through from the provider verbatim
        where one exists.
    """

    error_code: typ.ClassVar[str] = "platform_error"

    code: str
    message: str

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else type(self).error_code


class ProviderError(PlatformError):
    """Raised when a provider response carries an unclassified error envelope."""

    error_code: typ.ClassVar[str] = "provider_error"


class ContentFilterError(ProviderError):
    """Raised when the provider blocked the requested or generated content."""

    error_code: typ.ClassVar[str] = "content_filter"


class InvalidRequestError(ProviderError):
    """Raised when the provider rejected the request as malformed."""

    error_code: typ.ClassVar[str] = "invalid_request_error"


class ResponseFormatError(PlatformError, ValueError):
    """Raised when a provider payload does not have a recognized shape."""

    error_code: typ.ClassVar[str] = "response_format_error"


_CLASSIFIED_PROVIDER_ERRORS: dict[str, type[ProviderError]] = {
    ContentFilterError.error_code: ContentFilterError,
    InvalidRequestError.error_code: InvalidRequestError,
}


def classify_provider_error(code: str | None, message: str) -> ProviderError:
    """Build the exception matching a provider error code.

    Unknown or missing codes produce a plain ``ProviderError`` that keeps the
    provider's code when one was given.
    """
    error_type = _CLASSIFIED_PROVIDER_ERRORS.get(code or "")
    if error_type is not None:
        return error_type(message)
    return ProviderError(message, code=code)


__all__ = [
    "ContentFilterError",
    "InvalidRequestError",
    "PlatformError",
    "ProviderError",
    "ResponseFormatError",
    "classify_provider_error",
]
