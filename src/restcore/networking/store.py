"""Process-wide default configuration and per-call resolution."""

from __future__ import annotations

import io
import logging
import os
import threading
from pathlib import Path
from types import MappingProxyType
from typing import IO, Any, Mapping, Union

from dotenv.parser import parse_stream

from .constants import CONFIG_FILE_ENV, DEFAULT_CONFIGURATION
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ConfigurationSource = Union[str, os.PathLike, IO[Any], Mapping[str, Any]]


def _coerce_mapping(values: Mapping[str, Any]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for key, value in values.items():
        if value is None:
            raise ConfigurationError(f"configuration key {key!r} has no value")
        parsed[str(key)] = str(value)
    return parsed


def _read_stream(stream: IO[Any]) -> dict[str, str]:
    try:
        content = stream.read()
        if isinstance(content, bytes):
            content = content.decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(
            f"unable to read configuration stream: {exc}"
        ) from exc
    values: dict[str, str | None] = {}
    for binding in parse_stream(io.StringIO(content)):
        if binding.error:
            line = binding.original.string.strip()
            raise ConfigurationError(
                f"malformed configuration line {binding.original.line}: {line!r}"
            )
        if binding.key is not None:
            values[binding.key] = binding.value
    return _coerce_mapping(values)


def _read_file(path: str | os.PathLike[str]) -> dict[str, str]:
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(
            f"File doesn't exist: {file_path.absolute()}"
        )
    try:
        with file_path.open("rb") as stream:
            return _read_stream(stream)
    except OSError as exc:
        raise ConfigurationError(
            f"unable to read {file_path.absolute()}: {exc}"
        ) from exc


def load_source(source: ConfigurationSource) -> dict[str, str]:
    """Parse a configuration source into a plain ``key -> value`` map.

    Args:
        source: A file path, a readable text or byte stream of ``key=value``
            lines, or an already parsed mapping.

    Raises:
        ConfigurationError: The source is missing, unreadable, or contains a
            key without a value.
    """
    if isinstance(source, Mapping):
        return _coerce_mapping(source)
    if isinstance(source, (str, os.PathLike)):
        return _read_file(source)
    if hasattr(source, "read"):
        return _read_stream(source)
    raise ConfigurationError(
        f"unsupported configuration source type: {type(source).__name__}"
    )


class ConfigurationStore:
    """Holds process-wide defaults and resolves complete per-call maps.

    The installed defaults are replaced wholesale under a lock, so readers
    only ever see a fully built map.
    """

    def __init__(self, defaults: Mapping[str, str] | None = None) -> None:
        self._builtin: Mapping[str, str] = MappingProxyType(
            dict(DEFAULT_CONFIGURATION if defaults is None else defaults)
        )
        self._lock = threading.Lock()
        self._configuration: Mapping[str, str] | None = None
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def builtin_defaults(self) -> Mapping[str, str]:
        return self._builtin

    def initialize(self, source: ConfigurationSource) -> None:
        """Load ``source`` over the built-in defaults and install the result."""
        try:
            parsed = load_source(source)
        except ConfigurationError as exc:
            logger.error("Failed to load configuration: %s", exc, exc_info=True)
            raise
        self._install(self._merge(parsed))

    def resolve(self, override: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return a complete configuration map for one call.

        An ``override`` is merged over the built-in defaults. Without one the
        installed defaults are returned, auto-initializing them on first use.
        """
        if override is not None:
            return self._merge(_coerce_mapping(override))
        configuration = self._configuration
        if configuration is None:
            configuration = self._initialize_to_default()
        return dict(configuration)

    def reset(self) -> None:
        """Forget any installed configuration."""
        with self._lock:
            self._configuration = None
            self._initialized = False

    def _merge(self, override: Mapping[str, str]) -> dict[str, str]:
        merged = dict(self._builtin)
        merged.update(override)
        return merged

    def _install(self, configuration: dict[str, str]) -> None:
        frozen = MappingProxyType(configuration)
        with self._lock:
            self._configuration = frozen
            self._initialized = True

    def _initialize_to_default(self) -> Mapping[str, str]:
        with self._lock:
            if self._configuration is not None:
                return self._configuration
            config_file = os.environ.get(CONFIG_FILE_ENV)
            if config_file:
                logger.debug("Auto-initializing configuration from %s", config_file)
                try:
                    parsed = _read_file(config_file)
                except ConfigurationError as exc:
                    logger.error(
                        "Failed to load configuration: %s", exc, exc_info=True
                    )
                    raise
                configuration = self._merge(parsed)
            else:
                logger.debug("Auto-initializing configuration from defaults")
                configuration = dict(self._builtin)
            self._configuration = MappingProxyType(configuration)
            return self._configuration
