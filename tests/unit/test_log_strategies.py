"""Unit tests for log strategies and the access logger."""

import json
from datetime import datetime

import pytest
from sqlalchemy import create_engine, text

from rester.config import ResterSettings
from rester.contracts import Hooks
from rester.modules.access_logger import (
    build_log_record,
    merge_log_fields,
    select_strategy,
    write_access_log,
)
from rester.modules.log_strategies import DatabaseLog, FileLog, LogStrategy
from rester.types import ContentType, HttpMethod, LogMerge, PreparedRequest, ResponseState


@pytest.fixture
def prepared() -> PreparedRequest:
    return PreparedRequest(
        url="https://api.example.com/users",
        method=HttpMethod.GET,
        content_type=ContentType.JSON,
    )


@pytest.fixture
def response() -> ResponseState:
    return ResponseState(
        status_code=200,
        content="{}",
        requested_at=datetime(2024, 1, 2, 3, 4, 5, 600000),
        responded_at=datetime(2024, 1, 2, 3, 4, 6, 0),
    )


class RecordingLog(LogStrategy):
    def __init__(self):
        self.records = []

    def log(self, record):
        self.records.append(record)


class BrokenLog(LogStrategy):
    def log(self, record):
        raise RuntimeError("storage unavailable")


class TestFileLog:
    """Tests for the JSON-lines file strategy."""

    def test_appends_one_line_per_record(self, tmp_path):
        """Each record is one JSON line; parent directories are created."""
        path = tmp_path / "nested" / "api.log"
        strategy = FileLog(path)
        strategy.log({"uri": "a", "status_code": 200})
        strategy.log({"uri": "b", "status_code": 500})

        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line) for line in lines] == [
            {"uri": "a", "status_code": 200},
            {"uri": "b", "status_code": 500},
        ]


class TestDatabaseLog:
    """Tests for the SQLAlchemy strategy."""

    def test_creates_table_and_inserts(self, tmp_path):
        """A missing table is created; extra keys land in the context column."""
        url = f"sqlite:///{tmp_path / 'logs.db'}"
        strategy = DatabaseLog(url, "api_logs")
        strategy.log({
            "uri": "https://api.example.com",
            "method": "get",
            "status_code": 201,
            "request_at": "2024-01-02 03:04:05.600000",
            "response_at": "2024-01-02 03:04:06.000000",
            "tenant": "acme",
        })

        with strategy.engine.connect() as conn:
            row = conn.execute(text("SELECT uri, status_code, context FROM api_logs")).one()
        assert row.uri == "https://api.example.com"
        assert row.status_code == 201
        assert json.loads(row.context) == {"tenant": "acme"}

    def test_uses_existing_table(self, tmp_path):
        """An existing table is reflected; unknown keys are dropped."""
        engine = create_engine(f"sqlite:///{tmp_path / 'logs.db'}")
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE hits (uri TEXT, status_code INTEGER)"))

        strategy = DatabaseLog(engine, "hits")
        strategy.log({"uri": "/a", "status_code": 404, "method": "get"})

        with engine.connect() as conn:
            rows = conn.execute(text("SELECT uri, status_code FROM hits")).all()
        assert [tuple(r) for r in rows] == [("/a", 404)]

    def test_from_settings(self, tmp_path):
        settings = ResterSettings(log_db_url=f"sqlite:///{tmp_path / 'x.db'}", log_table="t")
        strategy = DatabaseLog.from_settings(settings)
        assert strategy.table_name == "t"

    def test_from_settings_requires_url(self):
        with pytest.raises(ValueError):
            DatabaseLog.from_settings(ResterSettings())


class TestLogMerge:
    """Tests for combining interceptor fields with defaults."""

    defaults = {"uri": "/a", "status_code": 200}
    intercepted = {"status_code": 999, "tenant": "acme"}

    def test_defaults_win(self):
        merged = merge_log_fields(self.defaults, self.intercepted, LogMerge.DEFAULTS_WIN)
        assert merged == {"status_code": 200, "tenant": "acme", "uri": "/a"}

    def test_interceptor_wins(self):
        merged = merge_log_fields(self.defaults, self.intercepted, LogMerge.INTERCEPTOR_WINS)
        assert merged == {"uri": "/a", "status_code": 999, "tenant": "acme"}

    def test_replace(self):
        merged = merge_log_fields(self.defaults, self.intercepted, LogMerge.REPLACE)
        assert merged == self.intercepted


class TestAccessLogger:
    """Tests for building and writing access-log records."""

    def test_default_record_fields(self, prepared, response):
        """The default record carries endpoint, method, status and timestamps."""
        record = build_log_record(prepared, response, Hooks())
        assert record == {
            "uri": "https://api.example.com/users",
            "method": "get",
            "status_code": 200,
            "request_at": "2024-01-02 03:04:05.600000",
            "response_at": "2024-01-02 03:04:06.000000",
        }

    def test_interceptor_fields_added(self, prepared, response):
        hooks = Hooks(access_log=lambda: {"tenant": "acme", "uri": "hidden"})
        record = build_log_record(prepared, response, hooks)
        assert record["tenant"] == "acme"
        assert record["uri"] == "https://api.example.com/users"

    def test_default_strategy_is_file(self, tmp_path):
        strategy = select_strategy(Hooks(), str(tmp_path / "a.log"))
        assert isinstance(strategy, FileLog)

    def test_capability_strategy_used(self, prepared, response, tmp_path):
        recorder = RecordingLog()
        hooks = Hooks(log_strategy=lambda: recorder)
        write_access_log(prepared, response, hooks, str(tmp_path / "unused.log"))
        assert len(recorder.records) == 1
        assert not (tmp_path / "unused.log").exists()

    def test_failing_strategy_is_swallowed(self, prepared, response, tmp_path, caplog):
        """A broken sink is reported, never raised."""
        hooks = Hooks(log_strategy=BrokenLog)
        result = write_access_log(prepared, response, hooks, str(tmp_path / "a.log"))
        assert result is None
        assert "Access log not written" in caplog.text
