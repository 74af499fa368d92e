"""Log Strategy interface."""

from abc import ABC, abstractmethod
from typing import Any


class LogStrategy(ABC):
    """Sink for access-log records.

    A strategy receives one flat mapping per logged request and is
    responsible for persisting it.
    """

    @abstractmethod
    def log(self, record: dict[str, Any]) -> None:
        """Persist a single access-log record."""
