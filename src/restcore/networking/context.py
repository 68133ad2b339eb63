"""Per-call overrides supplied by the caller."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class CallContext:
    """Optional data for a single call.

    Attributes:
        access_token: Value for the ``Authorization`` header, sent verbatim.
        request_id: Idempotency key sent as the ``Request-Id`` header.
        configuration: Override map merged over the built-in defaults
            instead of using the store's installed defaults.
    """

    access_token: str | None = None
    request_id: str | None = None
    configuration: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if self.configuration is not None:
            object.__setattr__(
                self,
                "configuration",
                MappingProxyType(dict(self.configuration)),
            )
