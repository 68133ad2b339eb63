"""JSON wire-format conversion backed by msgspec."""

from __future__ import annotations

from typing import Any, TypeVar

import msgspec

from .errors import DecodeError

T = TypeVar("T")


def from_wire(data: str | bytes, target: type[T]) -> T:
    """Decode a raw response body into ``target``.

    Raises:
        DecodeError: The body is not valid JSON or does not match ``target``.
    """
    try:
        return msgspec.json.decode(data, type=target)
    except msgspec.DecodeError as exc:
        name = getattr(target, "__name__", repr(target))
        raise DecodeError(f"cannot decode response as {name}: {exc}") from exc


def to_wire(value: Any) -> str:
    """Encode a payload object (struct, dataclass, dict, ...) as JSON text."""
    return msgspec.json.encode(value).decode("utf-8")
