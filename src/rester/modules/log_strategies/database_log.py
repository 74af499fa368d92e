"""Database Log Strategy.

Inserts each access-log record as a row through SQLAlchemy.
"""

import json
import logging
from typing import Any

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, create_engine, inspect
from sqlalchemy.engine import Engine

from rester.config import DEFAULT_LOG_TABLE, ResterSettings

from .base import LogStrategy


logger = logging.getLogger("rester.access_log")

# Column receiving record keys the table has no column for
CONTEXT_COLUMN = "context"


def build_log_table(name: str, meta: MetaData) -> Table:
    """Define the default access-log table."""
    return Table(
        name,
        meta,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("uri", Text, nullable=False),
        Column("method", String(16)),
        Column("status_code", Integer),
        Column("request_at", String(32)),
        Column("response_at", String(32)),
        Column(CONTEXT_COLUMN, Text),
    )


def _to_column_value(value: Any) -> Any:
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return value


class DatabaseLog(LogStrategy):
    """Write records into a SQL table.

    An existing table is reflected and used as-is. A missing table is
    created with the default layout on first use.
    """

    def __init__(self, connection: str | Engine, table: str = DEFAULT_LOG_TABLE) -> None:
        self.engine = create_engine(connection) if isinstance(connection, str) else connection
        self.table_name = table
        self._table: Table | None = None

    @classmethod
    def from_settings(cls, settings: ResterSettings) -> "DatabaseLog":
        """Build a strategy from RESTER_LOG_DB_URL and RESTER_LOG_TABLE.

        Raises:
            ValueError: If no database URL is configured.
        """
        if not settings.log_db_url:
            raise ValueError("RESTER_LOG_DB_URL environment variable not set")
        return cls(settings.log_db_url, settings.log_table)

    def _get_table(self) -> Table:
        if self._table is not None:
            return self._table

        meta = MetaData()
        if inspect(self.engine).has_table(self.table_name):
            self._table = Table(self.table_name, meta, autoload_with=self.engine)
        else:
            logger.info(f"Creating access-log table {self.table_name}")
            self._table = build_log_table(self.table_name, meta)
            meta.create_all(self.engine)
        return self._table

    def log(self, record: dict[str, Any]) -> None:
        table = self._get_table()
        columns = set(table.columns.keys())

        row = {key: _to_column_value(value) for key, value in record.items() if key in columns}
        extra = {key: value for key, value in record.items() if key not in columns}
        if extra:
            if CONTEXT_COLUMN in columns:
                row[CONTEXT_COLUMN] = json.dumps(extra, default=str)
            else:
                logger.debug(f"Dropping log fields without a column: {sorted(extra)}")

        with self.engine.begin() as conn:
            conn.execute(table.insert().values(**row))

    def __repr__(self) -> str:
        return f"DatabaseLog({self.engine.url!r}, {self.table_name!r})"
