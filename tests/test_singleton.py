"""Tests for the process-wide gateway helpers."""

from __future__ import annotations

import itertools
from unittest.mock import patch

import pytest

from dbgateway.config import AppConfig, GatewayConfig, LoggingConfig
from dbgateway.errors import InvalidConfiguration, NotConfigured
from dbgateway.gateway import DatabaseGateway, configure, get_instance, init_gateway

_VALID = ("shop", "app", "secret", "db.internal")
_INVALID_CASES = [
    args
    for args in itertools.product(*[(value, None, "") for value in _VALID])
    if args != _VALID
]


def test_get_instance_is_stable():
    first = get_instance()
    assert isinstance(first, DatabaseGateway)
    assert get_instance() is first
    assert not first.configured


def test_unconfigured_instance_raises():
    with pytest.raises(NotConfigured):
        get_instance().execute_update("DELETE FROM items")
    with pytest.raises(NotConfigured):
        get_instance().execute_query("SELECT 1")


@pytest.mark.parametrize("args", _INVALID_CASES)
def test_configure_rejects_null_or_empty(args):
    with pytest.raises(InvalidConfiguration) as exc_info:
        configure(*args)

    bad = [name for name, value in zip(("database", "user", "password", "host"), args) if not value]
    assert exc_info.value.fields == bad
    assert not get_instance().configured


def test_configure_returns_singleton():
    gw = configure(*_VALID)
    assert gw is get_instance()
    assert gw.configured
    assert gw.url == "mysql://db.internal/shop"


def test_last_configure_wins():
    first = configure(*_VALID)
    second = configure("archive", "reader", "pw2", "replica:3307")

    assert first is second
    config = get_instance().config
    assert (config.database, config.user, config.password, config.host) == (
        "archive",
        "reader",
        "pw2",
        "replica:3307",
    )
    assert get_instance().url == "mysql://replica:3307/archive"


def test_explicit_gateway_is_independent():
    shared = configure(*_VALID)
    own = DatabaseGateway(GatewayConfig(database="other", user="u", password="p", host="h"))

    assert own is not shared
    assert get_instance().config.database == "shop"


def test_init_gateway_from_app_config():
    config = AppConfig(
        gateway=GatewayConfig(database="shop", user="app", password="secret", host="db"),
        logging=LoggingConfig(level="warning"),
    )
    with patch("dbgateway.gateway.setup_logging") as mock_setup:
        gw = init_gateway(config)

    mock_setup.assert_called_once_with(config.logging)
    assert gw is get_instance()
    assert gw.config is config.gateway


def test_init_gateway_incomplete_config():
    with patch("dbgateway.gateway.setup_logging"):
        with pytest.raises(InvalidConfiguration):
            init_gateway(AppConfig(gateway=GatewayConfig(database="shop")))
