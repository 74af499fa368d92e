"""HTTP Dispatcher Module.

Performs exactly one HTTP request for a prepared request and records
the response. No retry logic. Transport failures are returned as
response data, never raised.
"""

import json
import logging
from typing import Any

import httpx

from rester.config import DEFAULT_TIMEOUT
from rester.exceptions import ResterApiException
from rester.types import ContentType, HttpMethod, PreparedRequest, RawResponse


logger = logging.getLogger("rester.dispatcher")

UNKNOWN_ERROR_MESSAGE = "Rester API unknown error."
TRANSPORT_ERROR_STATUS = 500
JSON_CONTENT_TYPE = "application/json"

# Errors httpx raises for a request that could not complete
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


def coerce_method(method: HttpMethod | str) -> HttpMethod:
    """Validate an HTTP method.

    Args:
        method: HttpMethod or its name in any case.

    Returns:
        The matching HttpMethod.

    Raises:
        ResterApiException: If the method is not supported (status 405).
    """
    if isinstance(method, HttpMethod):
        return method
    try:
        return HttpMethod(str(method).lower())
    except ValueError:
        raise ResterApiException(f"Unknown HTTP method {method}", http_status_code=405) from None


def _part_to_file(part: dict[str, Any]) -> tuple[Any, ...]:
    """Convert a multipart part descriptor to an httpx file tuple."""
    contents = part["contents"]
    if not isinstance(contents, (str, bytes)) and not hasattr(contents, "read"):
        contents = str(contents)

    filename = part.get("filename")
    part_type = part.get("content_type")
    if part_type is None:
        part_type = (part.get("headers") or {}).get("Content-Type")

    if part_type is not None:
        return (filename, contents, part_type)
    return (filename, contents)


def _encode_headers(headers: dict[str, str]) -> dict[str, str | bytes]:
    """Encode non-ASCII header values as UTF-8 bytes.

    Raises:
        ResterApiException: If a header name is not ASCII.
    """
    encoded: dict[str, str | bytes] = {}
    for name, value in headers.items():
        if not name.isascii():
            raise ResterApiException(f"Header name {name!r} must be ASCII")
        encoded[name] = value if value.isascii() else value.encode("utf-8")
    return encoded


def _json_content(body: Any, headers: dict[str, str | bytes]) -> str:
    """Encode a JSON body, falling back to str() for values json cannot encode."""
    if not any(name.lower() == "content-type" for name in headers):
        headers["Content-Type"] = JSON_CONTENT_TYPE
    return json.dumps(body, default=str, ensure_ascii=False)


def build_transport_kwargs(prepared: PreparedRequest) -> dict[str, Any]:
    """Map a prepared request to keyword arguments for httpx.

    An empty JSON or form payload sends no body at all.

    Raises:
        ResterApiException: If a header name is not ASCII.
    """
    headers = _encode_headers(prepared.headers)
    kwargs: dict[str, Any] = {}
    body = prepared.body

    if prepared.content_type == ContentType.JSON:
        if body:
            kwargs["content"] = _json_content(body, headers)
    elif prepared.content_type == ContentType.FORM_PARAMS:
        if body:
            kwargs["data"] = body
    elif prepared.content_type == ContentType.MULTIPART:
        kwargs["files"] = [(part["name"], _part_to_file(part)) for part in body]
    elif prepared.content_type == ContentType.BODY:
        if isinstance(body, (str, bytes)):
            kwargs["content"] = body
        elif body:
            kwargs["content"] = json.dumps(body, default=str)

    kwargs["headers"] = headers or None
    return kwargs


def _collect_headers(headers: httpx.Headers) -> dict[str, list[str]]:
    """Group response headers, keeping repeated values apart."""
    collected: dict[str, list[str]] = {}
    for key, value in headers.multi_items():
        collected.setdefault(key, []).append(value)
    return collected


def _record_response(response: httpx.Response) -> RawResponse:
    return RawResponse(
        status_code=response.status_code,
        headers=_collect_headers(response.headers),
        content=response.text,
    )


def _record_error(error: Exception) -> RawResponse:
    """Turn a transport error into response data."""
    response = getattr(error, "response", None)
    if isinstance(response, httpx.Response):
        logger.warning(f"   ✗ HTTP error {response.status_code}: {error}")
        return RawResponse(
            status_code=response.status_code,
            headers=_collect_headers(response.headers),
            content=response.text or str(error) or UNKNOWN_ERROR_MESSAGE,
        )

    logger.warning(f"   ✗ Transport error ({type(error).__name__}): {error}")
    return RawResponse(
        status_code=TRANSPORT_ERROR_STATUS,
        content=str(error) or UNKNOWN_ERROR_MESSAGE,
    )


def dispatch(
    prepared: PreparedRequest,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    request_timeout: float | None = None,
) -> RawResponse:
    """Send a prepared request and record the response.

    Args:
        prepared: Request to send.
        client: Optional client to send with; left open afterwards.
        timeout: Timeout for the short-lived client used when no client
            is given.
        request_timeout: Timeout passed to a given client for this
            request only; the client's own timeout applies when None.

    Returns:
        RawResponse with status, headers and text body. Transport
        failures come back as status 500 with the error message.
    """
    kwargs = build_transport_kwargs(prepared)
    method = prepared.method.value.upper()
    logger.debug(f"   {method} {prepared.url}")

    try:
        if client is not None:
            if request_timeout is not None:
                kwargs["timeout"] = request_timeout
            response = client.request(method, prepared.url, **kwargs)
        else:
            with httpx.Client(timeout=timeout) as owned_client:
                response = owned_client.request(method, prepared.url, **kwargs)
    except _TRANSPORT_ERRORS as e:
        return _record_error(e)

    return _record_response(response)


async def dispatch_async(
    prepared: PreparedRequest,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    request_timeout: float | None = None,
) -> RawResponse:
    """Async counterpart of dispatch()."""
    kwargs = build_transport_kwargs(prepared)
    method = prepared.method.value.upper()
    logger.debug(f"   {method} {prepared.url}")

    try:
        if client is not None:
            if request_timeout is not None:
                kwargs["timeout"] = request_timeout
            response = await client.request(method, prepared.url, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=timeout) as owned_client:
                response = await owned_client.request(method, prepared.url, **kwargs)
    except _TRANSPORT_ERRORS as e:
        return _record_error(e)

    return _record_response(response)
