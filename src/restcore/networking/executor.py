"""End-to-end execution of a single REST call.

``Executor.configure_and_execute`` is the full pipeline: resolve the
configuration, build a pre-handler, assemble the ``HttpConfiguration`` and
``run`` the exchange. ``run`` holds no state between calls apart from the
per-thread diagnostic slot.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, TypeVar, overload

from .codec import from_wire
from .config import HttpConfiguration, build_http_configuration
from .constants import HTTP_CONTENT_TYPE_HEADER
from .context import CallContext
from .diagnostics import DiagnosticSink, default_diagnostics
from .errors import ClientError
from .prehandler import PreHandler, PreHandlerFactory, RestPreHandlerFactory
from .store import ConfigurationStore
from .transport import ConnectionManager
from .types import CallResult, Diagnostics, HttpMethod

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _split_content_type(
    headers: Mapping[str, str] | None,
) -> tuple[dict[str, str] | None, str | None]:
    """Copy ``headers`` and lift a ``Content-Type`` entry out of the copy."""
    if headers is None:
        return None, None
    remaining = dict(headers)
    content_type = None
    for name in list(remaining):
        if name.lower() == HTTP_CONTENT_TYPE_HEADER.lower():
            content_type = remaining.pop(name)
    return remaining, content_type


class Executor:
    """Runs calls through an injected pre-handler factory and transport.

    Args:
        store: Source of resolved configuration. A private store with the
            built-in defaults is used when omitted.
        pre_handler_factory: Builds the pre-handler of each call. Swapping it
            changes endpoint, header and auth derivation for every call made
            through this executor.
        connection_manager: Provides configured transport connections.
        diagnostics: Sink receiving the last request/response; the shared
            per-thread slot by default.
        decoder: Turns a raw body into the requested result type. A blank
            body decodes to None without calling it.
    """

    def __init__(
        self,
        store: ConfigurationStore | None = None,
        pre_handler_factory: PreHandlerFactory | None = None,
        connection_manager: ConnectionManager | None = None,
        diagnostics: DiagnosticSink | None = None,
        decoder: Callable[[str, type], object] = from_wire,
    ) -> None:
        self._store = store if store is not None else ConfigurationStore()
        self._pre_handler_factory = (
            pre_handler_factory
            if pre_handler_factory is not None
            else RestPreHandlerFactory()
        )
        self._connection_manager = (
            connection_manager
            if connection_manager is not None
            else ConnectionManager()
        )
        self._diagnostics: DiagnosticSink = (
            diagnostics if diagnostics is not None else default_diagnostics
        )
        self._decoder = decoder

    @property
    def store(self) -> ConfigurationStore:
        return self._store

    @property
    def pre_handler_factory(self) -> PreHandlerFactory:
        return self._pre_handler_factory

    def last_request(self) -> str | None:
        return self._diagnostics.last_request

    def last_response(self) -> str | None:
        return self._diagnostics.last_response

    def close(self) -> None:
        self._connection_manager.close()

    @overload
    def configure_and_execute(
        self,
        method: HttpMethod | str,
        resource_path: str,
        payload: str | None = ...,
        *,
        context: CallContext | None = ...,
        headers: Mapping[str, str] | None = ...,
        result_type: type[T],
    ) -> CallResult[T]: ...

    @overload
    def configure_and_execute(
        self,
        method: HttpMethod | str,
        resource_path: str,
        payload: str | None = ...,
        *,
        context: CallContext | None = ...,
        headers: Mapping[str, str] | None = ...,
        result_type: None = ...,
    ) -> CallResult[None]: ...

    def configure_and_execute(
        self,
        method: HttpMethod | str,
        resource_path: str,
        payload: str | None = None,
        *,
        context: CallContext | None = None,
        headers: Mapping[str, str] | None = None,
        result_type: type[T] | None = None,
    ) -> CallResult[T] | CallResult[None]:
        """Resolve configuration, prepare and run one call.

        A ``Content-Type`` header in ``headers`` becomes the content-type of
        the call; the caller's mapping is never modified.

        Raises:
            ConfigurationError: Configuration could not be resolved or is
                malformed. Raised before anything is sent.
            ClientError: The exchange or the decoding failed.
        """
        context = context if context is not None else CallContext()
        configuration = self._store.resolve(context.configuration)
        custom_headers, content_type = _split_content_type(headers)

        pre_handler = self._pre_handler_factory.create(
            configuration,
            payload,
            resource_path,
            custom_headers,
            context.access_token,
            context.request_id,
        )
        http_configuration = build_http_configuration(
            configuration, method, content_type, pre_handler
        )
        return self.run(pre_handler, http_configuration, result_type)

    def run(
        self,
        pre_handler: PreHandler,
        http_configuration: HttpConfiguration,
        result_type: type[T] | None = None,
    ) -> CallResult[T] | CallResult[None]:
        """Send one prepared call and decode its response.

        The payload is recorded in the thread's diagnostic slot before it is
        sent; the response is recorded only once it has been received.

        Raises:
            ClientError: Any failure, chained to the original exception.
        """
        payload: str | None = None
        response: str | None = None
        try:
            headers = pre_handler.get_header_map()
            connection = self._connection_manager.get_connection(
                http_configuration
            )
            connection.configure(http_configuration)

            payload = pre_handler.get_payload()
            self._diagnostics.record_request(payload)
            logger.debug(
                "%s %s",
                http_configuration.http_method,
                http_configuration.endpoint_url,
            )
            response = connection.execute(
                pre_handler.get_endpoint(), payload, headers
            )
            self._diagnostics.record_response(response)

            value = None
            if result_type is not None and response.strip():
                value = self._decoder(response, result_type)
        except Exception as exc:
            logger.warning(
                "%s %s failed: %s",
                http_configuration.http_method,
                http_configuration.endpoint_url,
                exc,
            )
            raise ClientError(
                str(exc),
                diagnostics=Diagnostics(request=payload, response=response),
            ) from exc
        return CallResult(
            value=value,
            diagnostics=Diagnostics(request=payload, response=response),
        )
