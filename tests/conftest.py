"""Shared fixtures."""

from pathlib import Path

import pytest

from rester.config import ResterSettings


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "rester_api.log"


@pytest.fixture
def settings(log_path: Path) -> ResterSettings:
    return ResterSettings(log_path=str(log_path), timeout=5.0)
