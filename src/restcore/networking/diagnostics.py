"""Thread-scoped capture of the last request and response."""

from __future__ import annotations

import threading
from typing import Protocol


class DiagnosticSink(Protocol):
    """Receives what each call sends and receives on the current thread."""

    @property
    def last_request(self) -> str | None: ...

    @property
    def last_response(self) -> str | None: ...

    def record_request(self, payload: str) -> None: ...

    def record_response(self, response: str) -> None: ...


class ThreadLocalDiagnostics(threading.local):
    """Keeps the most recent request/response per thread.

    Each thread sees only what calls on that same thread recorded.
    """

    def __init__(self) -> None:
        self.last_request: str | None = None
        self.last_response: str | None = None

    def record_request(self, payload: str) -> None:
        self.last_request = payload

    def record_response(self, response: str) -> None:
        self.last_response = response

    def clear(self) -> None:
        self.last_request = None
        self.last_response = None


default_diagnostics = ThreadLocalDiagnostics()


def get_last_request() -> str | None:
    return default_diagnostics.last_request


def get_last_response() -> str | None:
    return default_diagnostics.last_response
