"""Capability contracts a request definition may implement.

Each contract is a runtime-checkable Protocol with a single method. A
request definition opts in by defining the method; the contracts are
checked once, when the request model is constructed, and the bound
methods are collected into a Hooks table that the pipeline reads.
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

from rester.modules.log_strategies import LogStrategy


@runtime_checkable
class HasFinalEndpoint(Protocol):
    def set_final_endpoint(self) -> str: ...


@runtime_checkable
class WithBaseUrl(Protocol):
    def set_base_url(self) -> str: ...


@runtime_checkable
class WithApiRoute(Protocol):
    def set_api_route(self) -> str: ...


@runtime_checkable
class WithRequestHeaders(Protocol):
    def default_request_headers(self) -> dict[str, str]: ...


@runtime_checkable
class WithDefaultPayload(Protocol):
    def default_payload(self) -> dict[str, Any]: ...


@runtime_checkable
class WithLogStrategy(Protocol):
    def set_log_strategy(self) -> LogStrategy: ...


@runtime_checkable
class RequestHeaderInterceptor(Protocol):
    def intercept_request_header(self, headers: dict[str, str]) -> dict[str, str]: ...


@runtime_checkable
class PayloadInterceptor(Protocol):
    def intercept_payload(self, payload: dict[str, Any]) -> dict[str, Any]: ...


@runtime_checkable
class ResponseContentInterceptor(Protocol):
    def intercept_response_content(self, content: str) -> str: ...


@runtime_checkable
class ResponseHeaderInterceptor(Protocol):
    def intercept_response_header(
        self, headers: dict[str, list[str]]
    ) -> dict[str, list[str]]: ...


@runtime_checkable
class AccessLogInterceptor(Protocol):
    def intercept_access_log(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class Hooks:
    """Optional callables supplied by a request definition.

    A field left as None means the capability is absent and the
    pipeline falls back to its default behavior.
    """

    final_endpoint: Callable[[], str] | None = None
    base_url: Callable[[], str] | None = None
    api_route: Callable[[], str] | None = None
    default_headers: Callable[[], dict[str, str]] | None = None
    default_payload: Callable[[], dict[str, Any]] | None = None
    log_strategy: Callable[[], LogStrategy] | None = None
    request_header: Callable[[dict[str, str]], dict[str, str]] | None = None
    payload: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    response_content: Callable[[str], str] | None = None
    response_header: Callable[[dict[str, list[str]]], dict[str, list[str]]] | None = None
    access_log: Callable[[], dict[str, Any]] | None = None


# contract -> (Hooks field, method name)
_CONTRACTS: list[tuple[type, str, str]] = [
    (HasFinalEndpoint, "final_endpoint", "set_final_endpoint"),
    (WithBaseUrl, "base_url", "set_base_url"),
    (WithApiRoute, "api_route", "set_api_route"),
    (WithRequestHeaders, "default_headers", "default_request_headers"),
    (WithDefaultPayload, "default_payload", "default_payload"),
    (WithLogStrategy, "log_strategy", "set_log_strategy"),
    (RequestHeaderInterceptor, "request_header", "intercept_request_header"),
    (PayloadInterceptor, "payload", "intercept_payload"),
    (ResponseContentInterceptor, "response_content", "intercept_response_content"),
    (ResponseHeaderInterceptor, "response_header", "intercept_response_header"),
    (AccessLogInterceptor, "access_log", "intercept_access_log"),
]


def resolve_hooks(definition: object) -> Hooks:
    """Collect the capabilities a request definition implements.

    Args:
        definition: Any object, usually a Rester subclass instance.

    Returns:
        Hooks with the bound method for every implemented contract.
    """
    found: dict[str, Callable[..., Any]] = {}
    for contract, field_name, method_name in _CONTRACTS:
        if isinstance(definition, contract):
            found[field_name] = getattr(definition, method_name)
    return Hooks(**found)


__all__ = [
    "AccessLogInterceptor",
    "HasFinalEndpoint",
    "Hooks",
    "PayloadInterceptor",
    "RequestHeaderInterceptor",
    "ResponseContentInterceptor",
    "ResponseHeaderInterceptor",
    "WithApiRoute",
    "WithBaseUrl",
    "WithDefaultPayload",
    "WithLogStrategy",
    "WithRequestHeaders",
    "resolve_hooks",
]
