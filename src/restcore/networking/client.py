"""Synchronous REST client facade over the call pipeline.

Resource classes call these verbs instead of talking to the executor
directly. Every call goes through ``Executor.configure_and_execute``.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from .codec import to_wire
from .context import CallContext
from .executor import Executor
from .types import HttpMethod

ResponseValue = TypeVar("ResponseValue")


class RestClient:
    """Verb-per-method client returning decoded values.

    Payloads may be raw JSON strings or any object msgspec can encode.
    """

    def __init__(self, executor: Executor | None = None) -> None:
        """Create a new RestClient.

        Args:
            executor: Executor used for every call; a default one is built
                when omitted.
        """
        self._executor = executor if executor is not None else Executor()

    @property
    def executor(self) -> Executor:
        return self._executor

    @staticmethod
    def _payload(payload: Any | None) -> str | None:
        if payload is None or isinstance(payload, str):
            return payload
        return to_wire(payload)

    def _call(
        self,
        method: HttpMethod,
        resource_path: str,
        payload: Any | None,
        context: CallContext | None,
        headers: Mapping[str, str] | None,
        result_type: type[ResponseValue] | None,
    ) -> ResponseValue | None:
        result = self._executor.configure_and_execute(
            method,
            resource_path,
            self._payload(payload),
            context=context,
            headers=headers,
            result_type=result_type,
        )
        return result.value

    def get(
        self,
        resource_path: str,
        *,
        result_type: type[ResponseValue] | None = None,
        context: CallContext | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseValue | None:
        """Perform a GET on ``resource_path``.

        Args:
            resource_path: Path relative to the configured endpoint, or an
                absolute URL.
            result_type: Type the response body is decoded into; the body is
                discarded when omitted.
            context: Optional token, request id and configuration override.
            headers: Extra headers; a ``Content-Type`` entry overrides the
                call's content type.

        Returns:
            The decoded response, or None without a ``result_type``.
        """
        return self._call(
            HttpMethod.GET, resource_path, None, context, headers, result_type
        )

    def post(
        self,
        resource_path: str,
        payload: Any | None = None,
        *,
        result_type: type[ResponseValue] | None = None,
        context: CallContext | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseValue | None:
        """Perform a POST with ``payload`` as the request body.

        Args:
            resource_path: Path relative to the configured endpoint, or an
                absolute URL.
            payload: Raw JSON string or an object msgspec can encode.
            result_type: Type the response body is decoded into.
            context: Optional token, request id and configuration override.
            headers: Extra headers.

        Returns:
            The decoded response, or None without a ``result_type``.
        """
        return self._call(
            HttpMethod.POST, resource_path, payload, context, headers, result_type
        )

    def put(
        self,
        resource_path: str,
        payload: Any | None = None,
        *,
        result_type: type[ResponseValue] | None = None,
        context: CallContext | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseValue | None:
        """Perform a PUT replacing the resource at ``resource_path``.

        Args:
            resource_path: Path relative to the configured endpoint, or an
                absolute URL.
            payload: Raw JSON string or an object msgspec can encode.
            result_type: Type the response body is decoded into.
            context: Optional token, request id and configuration override.
            headers: Extra headers.

        Returns:
            The decoded response, or None without a ``result_type``.
        """
        return self._call(
            HttpMethod.PUT, resource_path, payload, context, headers, result_type
        )

    def patch(
        self,
        resource_path: str,
        payload: Any | None = None,
        *,
        result_type: type[ResponseValue] | None = None,
        context: CallContext | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseValue | None:
        """Perform a PATCH applying ``payload`` to ``resource_path``.

        Args:
            resource_path: Path relative to the configured endpoint, or an
                absolute URL.
            payload: Raw JSON string or an object msgspec can encode.
            result_type: Type the response body is decoded into.
            context: Optional token, request id and configuration override.
            headers: Extra headers.

        Returns:
            The decoded response, or None without a ``result_type``.
        """
        return self._call(
            HttpMethod.PATCH, resource_path, payload, context, headers, result_type
        )

    def delete(
        self,
        resource_path: str,
        *,
        result_type: type[ResponseValue] | None = None,
        context: CallContext | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseValue | None:
        """Perform a DELETE on ``resource_path``.

        Args:
            resource_path: Path relative to the configured endpoint, or an
                absolute URL.
            result_type: Type the response body is decoded into; an empty
                body gives None.
            context: Optional token, request id and configuration override.
            headers: Extra headers.

        Returns:
            The decoded response, or None without a ``result_type``.
        """
        return self._call(
            HttpMethod.DELETE, resource_path, None, context, headers, result_type
        )
