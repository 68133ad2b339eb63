"""Connection layer built on requests.

Sessions are pooled by the transport-relevant part of an
``HttpConfiguration``; the retry budget is handed to urllib3 through the
session's adapter, so retries never surface above this module.
"""

from __future__ import annotations

import logging
import threading
from typing import Mapping, Protocol
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import HttpConfiguration, ProxySettings
from .constants import HTTP_CONTENT_TYPE_HEADER
from .errors import HttpStatusError, RequestTimeoutError, TransportError

logger = logging.getLogger(__name__)

PoolKey = tuple[int, int]


class Connection(Protocol):
    def configure(self, configuration: HttpConfiguration) -> None: ...

    def execute(
        self, url: str, payload: str, headers: Mapping[str, str]
    ) -> str: ...


def _seconds(milliseconds: int) -> float | None:
    if milliseconds <= 0:
        return None
    return milliseconds / 1000.0


def proxy_url(proxy: ProxySettings) -> str:
    credentials = ""
    if proxy.username:
        credentials = quote(proxy.username, safe="")
        if proxy.password:
            credentials += ":" + quote(proxy.password, safe="")
        credentials += "@"
    return f"http://{credentials}{proxy.host}:{proxy.port}"


class RequestsConnection:
    """One configured exchange over a ``requests.Session``."""

    def __init__(
        self, session: requests.Session, *, close_after_use: bool = False
    ) -> None:
        self._session = session
        self._close_after_use = close_after_use
        self._configuration: HttpConfiguration | None = None
        self._timeout: tuple[float | None, float | None] | None = None
        self._proxies: dict[str, str] | None = None

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def timeout(self) -> tuple[float | None, float | None] | None:
        return self._timeout

    @property
    def proxies(self) -> dict[str, str] | None:
        return self._proxies

    def configure(self, configuration: HttpConfiguration) -> None:
        self._configuration = configuration
        connect = _seconds(configuration.connection_timeout)
        read = _seconds(configuration.read_timeout)
        self._timeout = None if connect is None and read is None else (connect, read)
        if configuration.proxy is not None:
            url = proxy_url(configuration.proxy)
            self._proxies = {"http": url, "https": url}
        else:
            self._proxies = None

    def execute(self, url: str, payload: str, headers: Mapping[str, str]) -> str:
        """Send the request and return the raw response body.

        Raises:
            RequestTimeoutError: Connecting or reading timed out.
            HttpStatusError: The response status is not 2xx.
            TransportError: Any other network or protocol failure.
        """
        configuration = self._configuration
        if configuration is None:
            raise TransportError("connection used before configure()")
        request_headers = dict(headers)
        request_headers[HTTP_CONTENT_TYPE_HEADER] = configuration.content_type
        try:
            response = self._session.request(
                configuration.http_method,
                url,
                data=payload.encode("utf-8") if payload else None,
                headers=request_headers,
                timeout=self._timeout,
                proxies=self._proxies,
            )
            body = response.text
        except requests.exceptions.Timeout as exc:
            raise RequestTimeoutError(str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(str(exc)) from exc
        finally:
            if self._close_after_use:
                self._session.close()

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(
                f"{response.status_code} {response.reason}: {body}",
                status_code=response.status_code,
                body=body,
            )
        return body


class ConnectionManager:
    """Hands out connections, reusing sessions across equivalent configs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[PoolKey, requests.Session] = {}

    @staticmethod
    def pool_key(configuration: HttpConfiguration) -> PoolKey:
        return (configuration.max_retry, configuration.max_http_connection)

    @staticmethod
    def _new_session(configuration: HttpConfiguration) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_maxsize=configuration.max_http_connection,
            max_retries=Retry(
                total=configuration.max_retry, raise_on_status=False
            ),
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def get_connection(self, configuration: HttpConfiguration) -> RequestsConnection:
        # Sandboxed platforms cannot keep sockets between calls.
        if configuration.platform_sandbox:
            return RequestsConnection(
                self._new_session(configuration), close_after_use=True
            )
        key = self.pool_key(configuration)
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                logger.debug(
                    "Creating session pool retries=%d max_connections=%d", *key
                )
                session = self._new_session(configuration)
                self._sessions[key] = session
        return RequestsConnection(session)

    def close(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.close()
