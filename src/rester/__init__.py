"""Rester - configurable REST API client builder."""

from rester.contracts import (
    AccessLogInterceptor,
    HasFinalEndpoint,
    PayloadInterceptor,
    RequestHeaderInterceptor,
    ResponseContentInterceptor,
    ResponseHeaderInterceptor,
    WithApiRoute,
    WithBaseUrl,
    WithDefaultPayload,
    WithLogStrategy,
    WithRequestHeaders,
)
from rester.exceptions import ResterApiException
from rester.modules.log_strategies import DatabaseLog, FileLog, LogStrategy
from rester.rester import Rester
from rester.types import ContentType, EndpointJoin, HttpMethod, LogMerge

__version__ = "0.1.0"

__all__ = [
    "AccessLogInterceptor",
    "ContentType",
    "DatabaseLog",
    "EndpointJoin",
    "FileLog",
    "HasFinalEndpoint",
    "HttpMethod",
    "LogMerge",
    "LogStrategy",
    "PayloadInterceptor",
    "RequestHeaderInterceptor",
    "ResponseContentInterceptor",
    "ResponseHeaderInterceptor",
    "Rester",
    "ResterApiException",
    "WithApiRoute",
    "WithBaseUrl",
    "WithDefaultPayload",
    "WithLogStrategy",
    "WithRequestHeaders",
    "__version__",
]
