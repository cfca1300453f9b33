"""Shared fixtures for gateway tests."""

from __future__ import annotations

import pytest

from dbgateway.config import DatabaseBackend, GatewayConfig
from dbgateway.gateway import DatabaseGateway


@pytest.fixture(autouse=True)
def fresh_singleton(monkeypatch):
    """Each test starts without a process-wide gateway."""
    monkeypatch.setattr("dbgateway.gateway._instance", None)


@pytest.fixture
def sqlite_config(tmp_path) -> GatewayConfig:
    return GatewayConfig(
        database=str(tmp_path / "test.db"),
        user="tester",
        password="secret",
        host="localhost",
        backend=DatabaseBackend.SQLITE,
    )


@pytest.fixture
def gateway(sqlite_config) -> DatabaseGateway:
    """A SQLite-backed gateway with an empty ``items`` table."""
    gw = DatabaseGateway(sqlite_config)
    assert gw.execute_update(
        "CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT, price REAL, payload BLOB)"
    )
    return gw


@pytest.fixture
def mysql_config() -> GatewayConfig:
    return GatewayConfig(
        database="shop",
        user="app",
        password="secret",
        host="db.internal",
    )
