"""Database gateway — one fresh connection per statement, MySQL or SQLite."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing, contextmanager
from typing import Any, Generator, Mapping, Sequence

import pymysql
from pydantic import ValidationError

from dbgateway.config import AppConfig, DatabaseBackend, GatewayConfig, invalid_fields
from dbgateway.errors import (
    ConnectionFailure,
    DatabaseFailure,
    InvalidConfiguration,
    NotConfigured,
    StatementFailure,
)
from dbgateway.observability import setup_logging
from dbgateway.rows import ResultRow, rows_from_cursor

logger = logging.getLogger(__name__)

Params = Sequence[Any] | Mapping[str, Any] | None

_DRIVER_ERRORS: tuple[type[BaseException], ...] = (pymysql.MySQLError, sqlite3.Error)


def _preview(sql: str, limit: int = 200) -> str:
    """Single-line, truncated SQL text for log messages."""
    text = " ".join(sql.split())
    return text if len(text) <= limit else text[:limit] + "..."


class DatabaseGateway:
    """Runs raw SQL against one configured database.

    Holds configuration only; every statement opens its own connection and
    closes it before returning. ``execute_update`` / ``execute_query`` log
    database failures and return sentinels, ``run_update`` / ``run_query``
    raise them.
    """

    def __init__(self, config: GatewayConfig | None = None):
        self.config: GatewayConfig | None = None
        if config is not None:
            self.apply_config(config)

    @property
    def configured(self) -> bool:
        return self.config is not None

    @property
    def url(self) -> str | None:
        return self.config.url if self.config else None

    def configure(
        self, database: str, user: str, password: str, host: str, **options: Any
    ) -> DatabaseGateway:
        """Set the connection credentials, replacing any previous ones.

        Extra keyword arguments (``backend``, ``port``, ``connect_timeout``,
        ``charset``) are passed through to ``GatewayConfig``.
        """
        values = {"database": database, "user": user, "password": password, "host": host}
        invalid = [name for name, value in values.items() if not isinstance(value, str) or not value]
        if invalid:
            raise InvalidConfiguration(invalid)
        try:
            config = GatewayConfig(**values, **options)
        except ValidationError as exc:
            raise InvalidConfiguration(invalid_fields(exc)) from exc
        return self.apply_config(config)

    def apply_config(self, config: GatewayConfig) -> DatabaseGateway:
        # Revalidate: fields may have been assigned after construction
        invalid = config.missing_fields() + config.out_of_range_fields()
        if invalid:
            raise InvalidConfiguration(invalid)
        self.config = config
        logger.info("Database gateway configured: %s (user %s)", config.url, config.user)
        return self

    def _require_config(self) -> GatewayConfig:
        if self.config is None:
            raise NotConfigured()
        return self.config

    def _connect(self, config: GatewayConfig) -> Any:
        if config.backend == DatabaseBackend.SQLITE:
            try:
                # isolation_level=None: autocommit, matching the MySQL connection
                return sqlite3.connect(
                    config.database,
                    timeout=config.connect_timeout,
                    isolation_level=None,
                )
            except sqlite3.Error as exc:
                raise ConnectionFailure(f"Cannot open {config.url}: {exc}") from exc

        host, port = config.address
        try:
            return pymysql.connect(
                host=host,
                port=port,
                user=config.user,
                password=config.password,
                database=config.database,
                charset=config.charset,
                connect_timeout=config.connect_timeout,
                autocommit=True,
            )
        except (pymysql.MySQLError, OSError) as exc:
            raise ConnectionFailure(f"Cannot connect to {config.url}: {exc}") from exc

    @staticmethod
    def _close(conn: Any) -> None:
        try:
            conn.close()
        except _DRIVER_ERRORS:
            logger.warning("Error closing database connection", exc_info=True)

    @contextmanager
    def connection(self) -> Generator[Any, None, None]:
        """Open a new connection (context manager), always closed on exit."""
        conn = self._connect(self._require_config())
        try:
            yield conn
        finally:
            self._close(conn)

    def _execute(self, sql: str, params: Params, fetch: bool) -> tuple[int, list[ResultRow]]:
        with self.connection() as conn:
            try:
                with closing(conn.cursor()) as cursor:
                    if params is None:
                        cursor.execute(sql)
                    else:
                        cursor.execute(sql, params)
                    rows = rows_from_cursor(cursor) if fetch else []
                    return cursor.rowcount, rows
            except _DRIVER_ERRORS as exc:
                raise StatementFailure(str(exc)) from exc

    def run_update(self, sql: str, params: Params = None) -> int:
        """Execute an INSERT/UPDATE/DELETE and return the affected row count.

        Raises:
            NotConfigured: the gateway has no configuration yet.
            ConnectionFailure: the connection could not be opened.
            StatementFailure: the database rejected the statement.
        """
        rowcount, _ = self._execute(sql, params, fetch=False)
        logger.debug("Update affected %d row(s): %s", rowcount, _preview(sql))
        return rowcount

    def run_query(self, sql: str, params: Params = None) -> list[ResultRow]:
        """Execute a SELECT and return its rows; raises like ``run_update``."""
        _, rows = self._execute(sql, params, fetch=True)
        logger.debug("Query returned %d row(s): %s", len(rows), _preview(sql))
        return rows

    def execute_update(self, sql: str, params: Params = None) -> bool:
        """Execute a mutating statement. Returns False on any database failure.

        The statement kind is not checked: a SELECT runs and returns True.
        """
        try:
            self.run_update(sql, params)
        except DatabaseFailure:
            logger.exception("Update failed: %s", _preview(sql))
            return False
        return True

    def execute_query(self, sql: str, params: Params = None) -> list[ResultRow] | None:
        """Execute a query.

        Returns the rows, ``None`` when no connection could be opened, or an
        empty list when the statement failed. The statement kind is not
        checked: an UPDATE is applied and returns an empty list.
        """
        try:
            return self.run_query(sql, params)
        except ConnectionFailure:
            logger.exception("Query failed, no connection: %s", _preview(sql))
            return None
        except StatementFailure:
            logger.exception("Query failed: %s", _preview(sql))
            return []


# Module-level singleton
_instance: DatabaseGateway | None = None


def get_instance() -> DatabaseGateway:
    """Get the process-wide gateway, creating an unconfigured one if needed."""
    global _instance
    if _instance is None:
        _instance = DatabaseGateway()
    return _instance


def configure(
    database: str, user: str, password: str, host: str, **options: Any
) -> DatabaseGateway:
    """Configure the process-wide gateway and return it."""
    return get_instance().configure(database, user, password, host, **options)


def init_gateway(config: AppConfig) -> DatabaseGateway:
    """Set up logging and configure the process-wide gateway from ``config``."""
    setup_logging(config.logging)
    return get_instance().apply_config(config.gateway)
