"""Gateway configuration — env vars, YAML files, defaults."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


def _repo_root() -> Path:
    """Find the repository root (directory containing pyproject.toml)."""
    current = Path(__file__).resolve().parent.parent
    if (current / "pyproject.toml").exists():
        return current
    return Path.cwd()


REPO_ROOT = _repo_root()

# Settings that must be non-empty before the gateway can connect
REQUIRED_FIELDS = ("database", "user", "password", "host")

MAX_PORT = 65535
# PyMySQL rejects connect timeouts above one year
MAX_CONNECT_TIMEOUT = 31536000


def invalid_fields(exc: ValidationError) -> list[str]:
    """Top-level field names a pydantic validation error complains about."""
    names: list[str] = []
    for error in exc.errors():
        name = str(error["loc"][0]) if error["loc"] else "config"
        if name not in names:
            names.append(name)
    return names


class DatabaseBackend(str, Enum):
    MYSQL = "mysql"
    SQLITE = "sqlite"


class GatewayConfig(BaseSettings):
    """Connection settings for one database.

    ``host`` may carry an explicit port (``db.internal:3307``), which takes
    precedence over ``port``. For SQLite, ``database`` is the file path and
    the remaining credentials are stored but unused.
    """

    database: str = ""
    user: str = ""
    password: str = Field(default="", repr=False)
    host: str = ""
    backend: DatabaseBackend = DatabaseBackend.MYSQL
    port: int = Field(default=3306, gt=0, le=MAX_PORT)
    connect_timeout: int = Field(default=10, gt=0, le=MAX_CONNECT_TIMEOUT)
    charset: str = "utf8mb4"

    model_config = {"env_prefix": "DBGW_GATEWAY_"}

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def out_of_range_fields(self) -> list[str]:
        """Fields that fail validation, including values assigned after construction."""
        try:
            type(self).model_validate(self.model_dump())
        except ValidationError as exc:
            names = invalid_fields(exc)
        else:
            names = []
        if "host" not in names and not 0 < self.address[1] <= MAX_PORT:
            names.append("host")
        return names

    @property
    def address(self) -> tuple[str, int]:
        """Host name and port to dial."""
        if self.host.startswith("["):
            # Bracketed IPv6 literal, optionally followed by :port
            name, _, rest = self.host[1:].partition("]")
            port = rest.removeprefix(":")
            return name, int(port) if port.isdigit() else self.port
        if self.host.count(":") == 1:
            name, _, port = self.host.partition(":")
            if name and port.isdigit():
                return name, int(port)
        return self.host, self.port

    @property
    def url(self) -> str:
        if self.backend == DatabaseBackend.SQLITE:
            return f"sqlite:///{self.database}"
        return f"{self.backend.value}://{self.host}/{self.database}"


class LoggingConfig(BaseSettings):
    level: str = "info"
    environment: str = "development"
    sentry_dsn: str = ""

    model_config = {"env_prefix": "DBGW_LOGGING_"}


class AppConfig(BaseSettings):
    """Top-level configuration."""

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_prefix": "DBGW_"}

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """Load config from YAML file, with env var overrides."""
        if path is None:
            path = REPO_ROOT / "config" / "gateway.yml"

        values: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                values = yaml.safe_load(f) or {}

        return cls(**values)
