"""Error taxonomy for the call pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import Diagnostics


class RestCoreError(Exception):
    """Base class for all restcore errors."""


class ConfigurationError(RestCoreError):
    """Configuration source unreadable/malformed or a required value is bad."""


class TransportError(RestCoreError):
    """Network or protocol failure while exchanging a request."""


class RequestTimeoutError(TransportError):
    """The transport gave up waiting for a connection or a response."""


class HttpStatusError(TransportError):
    """The server answered with a non-success status."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(RestCoreError):
    """A response body does not match the requested target type."""


class ClientError(RestCoreError):
    """Uniform client-facing error raised by the executor.

    The original failure is available as ``__cause__``; ``diagnostics`` holds
    the attempted request (and no response) for the failed call.
    """

    def __init__(
        self, message: str, diagnostics: Diagnostics | None = None
    ) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics
