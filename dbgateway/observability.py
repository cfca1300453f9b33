"""Logging and error reporting setup."""

from __future__ import annotations

import logging

import sentry_sdk

from dbgateway.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _init_sentry(dsn: str, environment: str) -> None:
    """Initialize Sentry SDK if a DSN is configured and not in development."""
    if not dsn or environment == "development":
        return
    # Error-level log records (failed statements) become Sentry events
    sentry_sdk.init(
        dsn,
        environment=environment,
        send_default_pii=False,
        traces_sample_rate=0,
        send_client_reports=False,
        auto_session_tracking=False,
    )


def setup_logging(config: LoggingConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    _init_sentry(config.sentry_dsn, config.environment)
