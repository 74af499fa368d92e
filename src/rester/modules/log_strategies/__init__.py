"""Log Strategies Package - pluggable sinks for access-log records."""

from .base import LogStrategy
from .database_log import DatabaseLog
from .file_log import FileLog

__all__ = [
    "DatabaseLog",
    "FileLog",
    "LogStrategy",
]
