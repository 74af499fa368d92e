"""Exceptions raised by Rester."""

from typing import Any


class ResterApiException(Exception):
    """Configuration error detected before a request is dispatched.

    HTTP error responses are never raised; they are captured as
    response state instead.
    """

    def __init__(
        self,
        message: str,
        http_status_code: int = 500,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status_code = http_status_code
        self.response_body = response_body

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message!r}, "
            f"http_status_code={self.http_status_code})"
        )
