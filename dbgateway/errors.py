"""Error taxonomy for the database gateway.

Configuration errors propagate to the caller. Database failures are raised
by the typed API (``run_update`` / ``run_query``) and converted to sentinel
return values by ``execute_update`` / ``execute_query``.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base class for all gateway errors."""


class InvalidConfiguration(GatewayError, ValueError):
    """A configuration value is missing, empty or out of range."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(
            "Invalid gateway configuration (missing, empty or out of range): "
            + ", ".join(fields)
        )


class NotConfigured(GatewayError, RuntimeError):
    """A statement was issued before the gateway was configured."""

    def __init__(self) -> None:
        super().__init__("Database gateway not configured. Call configure() first.")


class DatabaseFailure(GatewayError):
    """Runtime failure talking to the database."""


class ConnectionFailure(DatabaseFailure):
    """The connection could not be established."""


class StatementFailure(DatabaseFailure):
    """The database rejected the statement or execution failed."""
