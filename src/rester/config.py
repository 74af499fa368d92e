"""Runtime settings for Rester.

Values come from environment variables; class attributes on a Rester
subclass and explicit builder calls take precedence over them.
"""

import os

from pydantic import BaseModel, Field


DEFAULT_LOG_PATH = "logs/rester_api.log"
DEFAULT_LOG_TABLE = "rester_api_logs"
DEFAULT_TIMEOUT = 30.0


class ResterSettings(BaseModel):
    """Settings shared by every request model."""

    log_path: str = Field(default=DEFAULT_LOG_PATH, description="File used by the default log strategy")
    log_db_url: str | None = Field(default=None, description="SQLAlchemy URL for DatabaseLog")
    log_table: str = Field(default=DEFAULT_LOG_TABLE, description="Table used by DatabaseLog")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Transport timeout in seconds")


def get_settings() -> ResterSettings:
    """Load settings from the environment.

    Reads RESTER_LOG_PATH, RESTER_LOG_DB_URL, RESTER_LOG_TABLE and
    RESTER_TIMEOUT; unset variables fall back to the defaults.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    values: dict[str, str] = {}
    env_map = {
        "log_path": "RESTER_LOG_PATH",
        "log_db_url": "RESTER_LOG_DB_URL",
        "log_table": "RESTER_LOG_TABLE",
        "timeout": "RESTER_TIMEOUT",
    }
    for field_name, env_name in env_map.items():
        value = os.environ.get(env_name)
        if value:
            values[field_name] = value

    return ResterSettings.model_validate(values)
