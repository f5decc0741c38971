"""
Application settings and logging setup.

Settings are read from environment variables (prefix CHESS_) so the same code runs against a local SQLite file, a test database, or a real server.
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError

ENV_PREFIX = "CHESS_"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    database_url: str = "sqlite:///chess_games.db"
    echo_sql: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise InvalidRequestError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect the CHESS_* variables. Anything not set keeps its default."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if f"{ENV_PREFIX}DATABASE_URL" in env:
            values["database_url"] = env[f"{ENV_PREFIX}DATABASE_URL"]
        if f"{ENV_PREFIX}ECHO_SQL" in env:
            values["echo_sql"] = env[f"{ENV_PREFIX}ECHO_SQL"].strip().lower() in TRUTHY
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            values["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]
        return cls(**values)


def configure_logging(level: str = "INFO") -> None:
    """Root logger setup. Calling it again only changes the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level.upper())
