"""REST call pipeline: configuration, pre-handling, transport, decoding."""

from .networking.client import RestClient
from .networking.constants import SDK_ID, SDK_VERSION
from .networking.context import CallContext
from .networking.errors import (
    ClientError,
    ConfigurationError,
    DecodeError,
    RestCoreError,
    TransportError,
)
from .networking.executor import Executor
from .networking.store import ConfigurationStore
from .networking.types import CallResult, Diagnostics, HttpMethod

__all__ = [
    "SDK_ID",
    "SDK_VERSION",
    "CallContext",
    "CallResult",
    "ClientError",
    "ConfigurationError",
    "ConfigurationStore",
    "DecodeError",
    "Diagnostics",
    "Executor",
    "HttpMethod",
    "RestClient",
    "RestCoreError",
    "TransportError",
]
