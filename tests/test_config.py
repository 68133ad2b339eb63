# pyright: reportUnknownMemberType=false
from dataclasses import FrozenInstanceError
from unittest.mock import Mock

import pytest

from restcore.networking import constants
from restcore.networking.config import (
    HttpConfiguration,
    ProxySettings,
    build_http_configuration,
    parse_bool,
)
from restcore.networking.errors import ConfigurationError
from restcore.networking.types import HttpMethod

ENDPOINT = "https://api.example.com/v1/payments"


@pytest.fixture
def configuration():
    resolved = dict(constants.DEFAULT_CONFIGURATION)
    resolved[constants.ENDPOINT] = "https://api.example.com"
    return resolved


@pytest.fixture
def pre_handler():
    handler = Mock()
    handler.get_endpoint.return_value = ENDPOINT
    return handler


def test_build_defaults_content_type_to_json(configuration, pre_handler):
    http_config = build_http_configuration(
        configuration, HttpMethod.GET, None, pre_handler
    )

    assert http_config.http_method == "GET"
    assert http_config.endpoint_url == ENDPOINT
    assert http_config.content_type == "application/json"


def test_build_uses_non_blank_content_type_override(configuration, pre_handler):
    http_config = build_http_configuration(
        configuration, "post", "application/x-www-form-urlencoded", pre_handler
    )

    assert http_config.http_method == "POST"
    assert http_config.content_type == "application/x-www-form-urlencoded"


def test_build_ignores_blank_content_type_override(configuration, pre_handler):
    http_config = build_http_configuration(
        configuration, HttpMethod.PUT, "   ", pre_handler
    )

    assert http_config.content_type == "application/json"


def test_build_reads_numeric_settings(configuration, pre_handler):
    http_config = build_http_configuration(
        configuration, HttpMethod.GET, None, pre_handler
    )

    assert http_config.connection_timeout == 5000
    assert http_config.read_timeout == 30000
    assert http_config.max_retry == 1
    assert http_config.max_http_connection == 100
    assert http_config.platform_sandbox is False
    assert http_config.proxy is None
    assert http_config.ip_address is None


def test_build_is_pure(configuration, pre_handler):
    first = build_http_configuration(
        configuration, HttpMethod.PATCH, None, pre_handler
    )
    second = build_http_configuration(
        dict(configuration), HttpMethod.PATCH, None, pre_handler
    )

    assert first == second
    assert hash(first) == hash(second)


def test_build_without_proxy_flag_ignores_proxy_values(
    configuration, pre_handler
):
    configuration.update(
        {
            constants.USE_HTTP_PROXY: "false",
            constants.HTTP_PROXY_HOST: "proxy.local",
            constants.HTTP_PROXY_PORT: "3128",
        }
    )

    http_config = build_http_configuration(
        configuration, HttpMethod.GET, None, pre_handler
    )

    assert http_config.proxy is None


def test_build_with_proxy_flag_reads_proxy_block(configuration, pre_handler):
    configuration.update(
        {
            constants.USE_HTTP_PROXY: "TRUE",
            constants.HTTP_PROXY_HOST: "proxy.local",
            constants.HTTP_PROXY_PORT: "3128",
            constants.HTTP_PROXY_USERNAME: "user",
            constants.HTTP_PROXY_PASSWORD: "secret",
        }
    )

    http_config = build_http_configuration(
        configuration, HttpMethod.GET, None, pre_handler
    )

    assert http_config.proxy == ProxySettings(
        host="proxy.local", port=3128, username="user", password="secret"
    )


def test_build_rejects_malformed_proxy_port(configuration, pre_handler):
    configuration.update(
        {
            constants.USE_HTTP_PROXY: "true",
            constants.HTTP_PROXY_HOST: "proxy.local",
            constants.HTTP_PROXY_PORT: "eighty",
        }
    )

    with pytest.raises(ConfigurationError, match=constants.HTTP_PROXY_PORT):
        build_http_configuration(
            configuration, HttpMethod.GET, None, pre_handler
        )


def test_build_rejects_proxy_without_host(configuration, pre_handler):
    configuration.update(
        {constants.USE_HTTP_PROXY: "true", constants.HTTP_PROXY_PORT: "8080"}
    )

    with pytest.raises(ConfigurationError):
        build_http_configuration(
            configuration, HttpMethod.GET, None, pre_handler
        )


@pytest.mark.parametrize(
    "key",
    [
        constants.HTTP_CONNECTION_TIMEOUT,
        constants.HTTP_CONNECTION_READ_TIMEOUT,
        constants.HTTP_CONNECTION_RETRY,
        constants.HTTP_CONNECTION_MAX_CONNECTION,
    ],
)
def test_build_rejects_non_numeric_required_values(
    configuration, pre_handler, key
):
    configuration[key] = "many"

    with pytest.raises(ConfigurationError, match=key):
        build_http_configuration(
            configuration, HttpMethod.GET, None, pre_handler
        )


def test_build_rejects_missing_required_value(configuration, pre_handler):
    del configuration[constants.HTTP_CONNECTION_RETRY]

    with pytest.raises(ConfigurationError, match="missing"):
        build_http_configuration(
            configuration, HttpMethod.GET, None, pre_handler
        )


def test_build_reads_sandbox_flag_and_device_ip(configuration, pre_handler):
    configuration[constants.PLATFORM_SANDBOX] = "True"
    configuration[constants.DEVICE_IP_ADDRESS] = "10.0.0.7"

    http_config = build_http_configuration(
        configuration, HttpMethod.GET, None, pre_handler
    )

    assert http_config.platform_sandbox is True
    assert http_config.ip_address == "10.0.0.7"


def test_http_configuration_is_immutable(configuration, pre_handler):
    http_config = build_http_configuration(
        configuration, HttpMethod.GET, None, pre_handler
    )

    with pytest.raises(FrozenInstanceError):
        http_config.max_retry = 5  # type: ignore[misc]


def test_http_configuration_rejects_negative_values():
    with pytest.raises(ConfigurationError):
        HttpConfiguration(
            http_method="GET",
            endpoint_url=ENDPOINT,
            connection_timeout=-1,
            read_timeout=0,
            max_retry=0,
            max_http_connection=1,
        )
    with pytest.raises(ConfigurationError):
        HttpConfiguration(
            http_method="GET",
            endpoint_url=ENDPOINT,
            connection_timeout=0,
            read_timeout=0,
            max_retry=0,
            max_http_connection=0,
        )


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), (" TRUE ", True), ("yes", False), ("", False), (None, False)],
)
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


@pytest.mark.parametrize("value", ["1_000", "٥", "5.0", "0x10", ""])
def test_build_rejects_non_plain_integers(configuration, pre_handler, value):
    configuration[constants.HTTP_CONNECTION_RETRY] = value

    with pytest.raises(ConfigurationError, match=constants.HTTP_CONNECTION_RETRY):
        build_http_configuration(
            configuration, HttpMethod.GET, None, pre_handler
        )


def test_build_accepts_signed_and_padded_integers(configuration, pre_handler):
    configuration[constants.HTTP_CONNECTION_RETRY] = "+2"
    configuration[constants.HTTP_CONNECTION_TIMEOUT] = " 750 "

    http_config = build_http_configuration(
        configuration, HttpMethod.GET, None, pre_handler
    )

    assert http_config.max_retry == 2
    assert http_config.connection_timeout == 750
