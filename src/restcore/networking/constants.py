"""Configuration keys, header names, and built-in defaults."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

SDK_ID = "restcore-python"
SDK_VERSION = "0.6.0"

# Configuration keys
ENDPOINT = "service.EndPoint"
HTTP_CONNECTION_TIMEOUT = "http.ConnectionTimeOut"
HTTP_CONNECTION_READ_TIMEOUT = "http.ReadTimeOut"
HTTP_CONNECTION_RETRY = "http.Retry"
HTTP_CONNECTION_MAX_CONNECTION = "http.MaxConnection"
USE_HTTP_PROXY = "http.UseProxy"
HTTP_PROXY_HOST = "http.ProxyHost"
HTTP_PROXY_PORT = "http.ProxyPort"
HTTP_PROXY_USERNAME = "http.ProxyUserName"
HTTP_PROXY_PASSWORD = "http.ProxyPassword"
PLATFORM_SANDBOX = "http.PlatformSandbox"
DEVICE_IP_ADDRESS = "http.IPAddress"

CONFIG_FILE_ENV = "RESTCORE_CONFIG_FILE"

# Headers
HTTP_CONTENT_TYPE_HEADER = "Content-Type"
HTTP_ACCEPT_HEADER = "Accept"
HTTP_USER_AGENT_HEADER = "User-Agent"
AUTHORIZATION_HEADER = "Authorization"
REQUEST_ID_HEADER = "Request-Id"

HTTP_CONTENT_TYPE_JSON = "application/json"

DEFAULT_CONFIGURATION: Mapping[str, str] = MappingProxyType(
    {
        HTTP_CONNECTION_TIMEOUT: "5000",
        HTTP_CONNECTION_READ_TIMEOUT: "30000",
        HTTP_CONNECTION_RETRY: "1",
        HTTP_CONNECTION_MAX_CONNECTION: "100",
        USE_HTTP_PROXY: "false",
        PLATFORM_SANDBOX: "false",
    }
)
