"""File Log Strategy.

Appends each access-log record as one JSON line.
"""

import json
from pathlib import Path
from typing import Any

from .base import LogStrategy


class FileLog(LogStrategy):
    """Append records to a JSON-lines file, creating parent directories."""

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)

    def log(self, record: dict[str, Any]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(record, default=str, ensure_ascii=False)
        with open(self.file_path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def __repr__(self) -> str:
        return f"FileLog({str(self.file_path)!r})"
