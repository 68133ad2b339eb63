"""Immutable per-call transport configuration and its builder."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from .constants import (
    DEVICE_IP_ADDRESS,
    HTTP_CONNECTION_MAX_CONNECTION,
    HTTP_CONNECTION_READ_TIMEOUT,
    HTTP_CONNECTION_RETRY,
    HTTP_CONNECTION_TIMEOUT,
    HTTP_CONTENT_TYPE_JSON,
    HTTP_PROXY_HOST,
    HTTP_PROXY_PASSWORD,
    HTTP_PROXY_PORT,
    HTTP_PROXY_USERNAME,
    PLATFORM_SANDBOX,
    USE_HTTP_PROXY,
)
from .errors import ConfigurationError
from .prehandler import PreHandler
from .types import HttpMethod

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ProxySettings:
    host: str
    port: int
    username: str | None = None
    password: str | None = None

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigurationError("proxy host must be set when proxy is enabled")
        if not 0 < self.port < 65536:
            raise ConfigurationError("proxy port must be between 1 and 65535")


@dataclass(frozen=True)
class HttpConfiguration:
    """Transport settings for exactly one call.

    Timeouts are in milliseconds; ``0`` disables the timeout.
    """

    http_method: str
    endpoint_url: str
    connection_timeout: int
    read_timeout: int
    max_retry: int
    max_http_connection: int
    content_type: str = HTTP_CONTENT_TYPE_JSON
    platform_sandbox: bool = False
    proxy: ProxySettings | None = None
    ip_address: str | None = None

    def __post_init__(self) -> None:
        if self.connection_timeout < 0:
            raise ConfigurationError("connection timeout must be >= 0")
        if self.read_timeout < 0:
            raise ConfigurationError("read timeout must be >= 0")
        if self.max_retry < 0:
            raise ConfigurationError("retry count must be >= 0")
        if self.max_http_connection <= 0:
            raise ConfigurationError("max connections must be > 0")


def parse_bool(value: str | None) -> bool:
    """Parse a configuration flag; anything but ``true`` is false."""
    return value is not None and value.strip().lower() == "true"


def parse_int(configuration: Mapping[str, str], key: str) -> int:
    value = configuration.get(key)
    if value is None:
        raise ConfigurationError(f"missing required configuration value {key}")
    # ASCII digits only; int() also accepts "1_000" and non-ASCII digits.
    if not _INTEGER.fullmatch(value.strip()):
        raise ConfigurationError(f"{key} must be an integer, got {value!r}")
    return int(value.strip())


def _optional(configuration: Mapping[str, str], key: str) -> str | None:
    value = configuration.get(key)
    if value is None or not value.strip():
        return None
    return value


def build_proxy(configuration: Mapping[str, str]) -> ProxySettings | None:
    if not parse_bool(configuration.get(USE_HTTP_PROXY)):
        return None
    port = parse_int(configuration, HTTP_PROXY_PORT)
    return ProxySettings(
        host=(configuration.get(HTTP_PROXY_HOST) or "").strip(),
        port=port,
        username=_optional(configuration, HTTP_PROXY_USERNAME),
        password=_optional(configuration, HTTP_PROXY_PASSWORD),
    )


def build_http_configuration(
    configuration: Mapping[str, str],
    http_method: HttpMethod | str,
    content_type: str | None,
    pre_handler: PreHandler,
) -> HttpConfiguration:
    """Assemble the transport configuration of one call.

    Has no side effects: equal inputs give equal outputs.

    Raises:
        ConfigurationError: A required numeric value is missing or malformed,
            or the proxy settings are incomplete.
    """
    resolved_content_type = (
        content_type
        if content_type is not None and content_type.strip()
        else HTTP_CONTENT_TYPE_JSON
    )
    return HttpConfiguration(
        http_method=str(http_method).upper(),
        endpoint_url=pre_handler.get_endpoint(),
        content_type=resolved_content_type,
        platform_sandbox=parse_bool(configuration.get(PLATFORM_SANDBOX)),
        proxy=build_proxy(configuration),
        connection_timeout=parse_int(configuration, HTTP_CONNECTION_TIMEOUT),
        read_timeout=parse_int(configuration, HTTP_CONNECTION_READ_TIMEOUT),
        max_retry=parse_int(configuration, HTTP_CONNECTION_RETRY),
        max_http_connection=parse_int(
            configuration, HTTP_CONNECTION_MAX_CONNECTION
        ),
        ip_address=_optional(configuration, DEVICE_IP_ADDRESS),
    )
