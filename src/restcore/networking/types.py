"""Small value types shared across the networking layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostics:
    """Raw request payload and response body of one call."""

    request: str | None = None
    response: str | None = None


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """Decoded value of a call plus what was sent and received."""

    value: T | None
    diagnostics: Diagnostics
