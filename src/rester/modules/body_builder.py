"""Body Builder Module.

Produces the wire-ready request body for a content type.
"""

from typing import Any

from rester.exceptions import ResterApiException
from rester.types import ContentType


def is_part_descriptor(value: Any) -> bool:
    """Check whether a payload value already describes a multipart part."""
    return isinstance(value, dict) and "name" in value and "contents" in value


def build_multipart(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Turn a flat payload into multipart parts, preserving key order.

    Example:
        {"a": "1", "b": "2"} -> [{"name": "a", "contents": "1"},
                                 {"name": "b", "contents": "2"}]
    """
    parts: list[dict[str, Any]] = []
    for key, value in payload.items():
        if is_part_descriptor(value):
            parts.append(value)
        else:
            parts.append({"name": key, "contents": value})
    return parts


def build_body(
    payload: dict[str, Any],
    content_type: ContentType,
    raw_body: str | bytes | None = None,
) -> Any:
    """Build the request body.

    Args:
        payload: Final (merged and intercepted) payload.
        content_type: Encoding to build the body for.
        raw_body: Explicit body used for ContentType.BODY.

    Returns:
        The payload for JSON and form bodies, a list of parts for
        multipart, and the raw body (or payload) for BODY.

    Raises:
        ResterApiException: If the content type is not supported.
    """
    if content_type == ContentType.JSON:
        return payload
    if content_type == ContentType.FORM_PARAMS:
        return payload
    if content_type == ContentType.MULTIPART:
        return build_multipart(payload)
    if content_type == ContentType.BODY:
        return raw_body if raw_body is not None else payload

    raise ResterApiException(f"Unsupported content type: {content_type!r}")
