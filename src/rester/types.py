"""Core type definitions for Rester.

All data flowing through the request pipeline uses Pydantic models.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Timestamp format used in access-log records
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


# ============================================================================
# Enums
# ============================================================================


class HttpMethod(str, Enum):
    """Supported HTTP methods."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


class ContentType(str, Enum):
    """Supported request body encodings."""

    JSON = "json"
    FORM_PARAMS = "form_params"
    MULTIPART = "multipart"
    BODY = "body"


class EndpointJoin(str, Enum):
    """How base URL, API route and appended segment are joined."""

    CONCAT = "concat"
    NORMALIZE = "normalize"


class LogMerge(str, Enum):
    """How interceptor-supplied access-log fields combine with the defaults."""

    DEFAULTS_WIN = "defaults_win"
    INTERCEPTOR_WINS = "interceptor_wins"
    REPLACE = "replace"


# ============================================================================
# Request Types
# ============================================================================


class RequestConfig(BaseModel):
    """Immutable configuration of a single API call."""

    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    api_route: str = ""
    endpoint: str = ""
    append_endpoint: str = ""
    endpoint_overwritten: bool = False
    headers: dict[str, str] = Field(default_factory=dict)
    payload: dict[str, Any] = Field(default_factory=dict)
    raw_body: str | bytes | None = None
    content_type: ContentType = ContentType.JSON
    method: HttpMethod | str = HttpMethod.POST
    log: bool = False
    join_mode: EndpointJoin = EndpointJoin.CONCAT
    log_merge: LogMerge = LogMerge.DEFAULTS_WIN
    timeout: float | None = None


class PreparedRequest(BaseModel):
    """A request after endpoint resolution, merging and interception."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: HttpMethod
    content_type: ContentType
    headers: dict[str, str] = Field(default_factory=dict)
    payload: dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    headers_before_intercept: dict[str, str] = Field(default_factory=dict)
    payload_before_intercept: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Response Types
# ============================================================================


class RawResponse(BaseModel):
    """What the transport handed back, before any interception."""

    status_code: int
    headers: dict[str, list[str]] = Field(default_factory=dict)
    content: str = ""


class ResponseState(BaseModel):
    """Response exposed to callers after a send."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, list[str]] = Field(default_factory=dict)
    content: str = ""
    content_before_intercept: str = ""
    headers_before_intercept: dict[str, list[str]] = Field(default_factory=dict)
    requested_at: datetime
    responded_at: datetime


# ============================================================================
# Logging Types
# ============================================================================


class AccessLogRecord(BaseModel):
    """Default fields written for every logged request."""

    uri: str
    method: str
    status_code: int
    request_at: str
    response_at: str

    @classmethod
    def build(
        cls,
        request: PreparedRequest,
        response: ResponseState,
    ) -> "AccessLogRecord":
        return cls(
            uri=request.url,
            method=request.method.value,
            status_code=response.status_code,
            request_at=response.requested_at.strftime(TIMESTAMP_FORMAT),
            response_at=response.responded_at.strftime(TIMESTAMP_FORMAT),
        )
