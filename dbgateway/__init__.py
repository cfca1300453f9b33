"""Database gateway — raw SQL over a fresh connection per call."""

from dbgateway.config import AppConfig, DatabaseBackend, GatewayConfig
from dbgateway.errors import (
    ConnectionFailure,
    DatabaseFailure,
    GatewayError,
    InvalidConfiguration,
    NotConfigured,
    StatementFailure,
)
from dbgateway.gateway import DatabaseGateway, configure, get_instance, init_gateway
from dbgateway.rows import ResultRow

__all__ = [
    "AppConfig",
    "DatabaseBackend",
    "GatewayConfig",
    "ConnectionFailure",
    "DatabaseFailure",
    "GatewayError",
    "InvalidConfiguration",
    "NotConfigured",
    "StatementFailure",
    "DatabaseGateway",
    "configure",
    "get_instance",
    "init_gateway",
    "ResultRow",
]
