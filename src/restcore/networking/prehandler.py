"""Derivation of endpoint, headers and payload for one call.

A pre-handler is the extension point for alternative auth or header schemes:
the executor only talks to the ``PreHandler`` protocol, and the factory that
builds pre-handlers is injected into it.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Protocol, runtime_checkable
from urllib.parse import urljoin

from .constants import (
    AUTHORIZATION_HEADER,
    ENDPOINT,
    HTTP_ACCEPT_HEADER,
    HTTP_CONTENT_TYPE_HEADER,
    HTTP_CONTENT_TYPE_JSON,
    HTTP_USER_AGENT_HEADER,
    REQUEST_ID_HEADER,
    SDK_ID,
    SDK_VERSION,
)
from .errors import ConfigurationError


@runtime_checkable
class PreHandler(Protocol):
    def get_endpoint(self) -> str: ...

    def get_header_map(self) -> dict[str, str]: ...

    def get_payload(self) -> str: ...


@runtime_checkable
class PreHandlerFactory(Protocol):
    def create(
        self,
        configuration: Mapping[str, str],
        payload: str | None,
        resource_path: str,
        headers: Mapping[str, str] | None,
        access_token: str | None,
        request_id: str | None,
    ) -> PreHandler: ...


def _empty_headers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class PreHandlerInput:
    """Call parameters a pre-handler works from."""

    resource_path: str
    payload: str | None = None
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    access_token: str | None = None
    request_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "headers", MappingProxyType(dict(self.headers))
        )


def user_agent() -> str:
    return f"{SDK_ID}/{SDK_VERSION} (python {platform.python_version()})"


class RestPreHandler:
    """Default pre-handler for JSON REST resources."""

    def __init__(
        self, configuration: Mapping[str, str], call_input: PreHandlerInput
    ) -> None:
        self._configuration = MappingProxyType(dict(configuration))
        self._input = call_input

    @property
    def call_input(self) -> PreHandlerInput:
        return self._input

    def get_base_url(self) -> str:
        base_url = (self._configuration.get(ENDPOINT) or "").strip()
        if not base_url:
            raise ConfigurationError(f"{ENDPOINT} is not configured")
        return base_url

    def get_endpoint(self) -> str:
        """Join the configured base URL and the resource path.

        An absolute resource URL replaces the base entirely.
        """
        base_url = self.get_base_url().rstrip("/") + "/"
        return urljoin(base_url, self._input.resource_path.lstrip("/"))

    def get_header_map(self) -> dict[str, str]:
        headers = {
            HTTP_CONTENT_TYPE_HEADER: HTTP_CONTENT_TYPE_JSON,
            HTTP_ACCEPT_HEADER: HTTP_CONTENT_TYPE_JSON,
            HTTP_USER_AGENT_HEADER: user_agent(),
        }
        if self._input.access_token:
            headers[AUTHORIZATION_HEADER] = self._input.access_token
        if self._input.request_id:
            headers[REQUEST_ID_HEADER] = self._input.request_id
        headers.update(self._input.headers)
        return headers

    def get_payload(self) -> str:
        return self._input.payload or ""


class RestPreHandlerFactory:
    """Builds a fresh ``RestPreHandler`` for every call."""

    def create(
        self,
        configuration: Mapping[str, str],
        payload: str | None,
        resource_path: str,
        headers: Mapping[str, str] | None,
        access_token: str | None,
        request_id: str | None,
    ) -> RestPreHandler:
        call_input = PreHandlerInput(
            resource_path=resource_path,
            payload=payload,
            headers=headers or {},
            access_token=access_token,
            request_id=request_id,
        )
        return RestPreHandler(configuration, call_input)
