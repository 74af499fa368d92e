"""Interceptor Chain.

Each interception point takes at most one synchronous transformation.
A missing interceptor passes the data through unchanged. Every helper
returns the value before interception next to the intercepted value so
callers can keep a snapshot.
"""

from typing import Any, Callable, TypeVar

from rester.contracts import Hooks

T = TypeVar("T")


def copy_containers(data: Any) -> Any:
    """Copy nested dicts, lists and tuples; other values are shared.

    Leaf values, such as open files in a multipart payload, are shared.
    """
    if isinstance(data, dict):
        return {key: copy_containers(value) for key, value in data.items()}
    if isinstance(data, list):
        return [copy_containers(value) for value in data]
    if isinstance(data, tuple):
        return tuple(copy_containers(value) for value in data)
    return data


def intercept(data: T, interceptor: Callable[[T], T] | None) -> tuple[T, T]:
    """Run an optional interceptor.

    Args:
        data: Value flowing through the pipeline.
        interceptor: Transformation to apply, or None.

    Returns:
        Tuple of (value before interception, intercepted value). The
        interceptor works on a copy of the nested containers, so editing
        them in place alters neither the snapshot nor the caller's data.
    """
    if interceptor is None:
        return data, data
    return data, interceptor(copy_containers(data))


def intercept_request(
    headers: dict[str, str],
    payload: dict[str, Any],
    hooks: Hooks,
) -> tuple[tuple[dict[str, str], dict[str, str]], tuple[dict[str, Any], dict[str, Any]]]:
    """Apply the request header and payload interceptors."""
    return (
        intercept(headers, hooks.request_header),
        intercept(payload, hooks.payload),
    )


def intercept_response(
    content: str,
    headers: dict[str, list[str]],
    hooks: Hooks,
) -> tuple[tuple[str, str], tuple[dict[str, list[str]], dict[str, list[str]]]]:
    """Apply the response content and response header interceptors."""
    return (
        intercept(content, hooks.response_content),
        intercept(headers, hooks.response_header),
    )
