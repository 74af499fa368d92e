"""Request Pipeline Orchestrator.

Coordinates one request from configuration to logged response:
endpoint resolution, header/payload merge, request interception, body
construction, dispatch, response interception and access logging.
"""

import logging
from datetime import datetime

import anyio.to_thread
import httpx
from pydantic import BaseModel

from rester.config import ResterSettings, get_settings
from rester.contracts import Hooks
from rester.exceptions import ResterApiException
from rester.types import PreparedRequest, RawResponse, RequestConfig, ResponseState

from .access_logger import write_access_log
from .body_builder import build_body
from .dispatcher import coerce_method, dispatch, dispatch_async
from .endpoint_resolver import resolve_endpoint
from .interceptors import intercept_request, intercept_response
from .merger import merge_headers_and_payload


# Set up logging
logger = logging.getLogger("rester.pipeline")


class PipelineResult(BaseModel):
    """Everything one pass through the pipeline produced."""

    request: PreparedRequest
    response: ResponseState
    log_record: dict | None = None


def prepare_request(config: RequestConfig, hooks: Hooks) -> PreparedRequest:
    """Build the request that will be sent.

    Args:
        config: Request configuration.
        hooks: Capabilities of the request definition.

    Returns:
        PreparedRequest with the resolved URL, final headers, payload
        and body, plus the pre-interception snapshots.

    Raises:
        ResterApiException: If the endpoint is empty, the method is not
            supported or the content type is unknown.
    """
    url = resolve_endpoint(config, hooks)
    logger.debug(f"   Resolved endpoint: {url!r}")

    headers, payload = merge_headers_and_payload(
        config.headers,
        config.payload,
        default_headers=hooks.default_headers,
        default_payload=hooks.default_payload,
    )

    (headers_before, headers), (payload_before, payload) = intercept_request(headers, payload, hooks)
    logger.debug(f"   Headers: {list(headers)}")
    logger.debug(f"   Payload keys: {list(payload)}")

    if not url:
        raise ResterApiException("Endpoint not set")

    method = coerce_method(config.method)
    body = build_body(payload, config.content_type, config.raw_body)

    return PreparedRequest(
        url=url,
        method=method,
        content_type=config.content_type,
        headers=headers,
        payload=payload,
        body=body,
        headers_before_intercept=headers_before,
        payload_before_intercept=payload_before,
    )


def finalize_response(
    raw: RawResponse,
    hooks: Hooks,
    requested_at: datetime,
    responded_at: datetime,
) -> ResponseState:
    """Apply the response interceptors to a raw response."""
    (content_before, content), (headers_before, headers) = intercept_response(
        raw.content, raw.headers, hooks
    )
    return ResponseState(
        status_code=raw.status_code,
        headers=headers,
        content=content,
        content_before_intercept=content_before,
        headers_before_intercept=headers_before,
        requested_at=requested_at,
        responded_at=responded_at,
    )


def _log_if_enabled(
    config: RequestConfig,
    hooks: Hooks,
    settings: ResterSettings,
    prepared: PreparedRequest,
    response: ResponseState,
) -> dict | None:
    if not config.log:
        return None
    return write_access_log(prepared, response, hooks, settings.log_path, config.log_merge)


def run_pipeline(
    config: RequestConfig,
    hooks: Hooks,
    client: httpx.Client | None = None,
    settings: ResterSettings | None = None,
) -> PipelineResult:
    """Run one request through the whole pipeline.

    Args:
        config: Request configuration.
        hooks: Capabilities of the request definition.
        client: Optional httpx client to send with.
        settings: Settings; loaded from the environment when omitted.

    Returns:
        PipelineResult. HTTP and transport failures are part of the
        response state, not raised.

    Raises:
        ResterApiException: On configuration errors, before any network
            call is made.
    """
    settings = settings or get_settings()
    prepared = prepare_request(config, hooks)
    logger.info(f"🌐 {prepared.method.value.upper()} {prepared.url}")

    requested_at = datetime.now()
    raw = dispatch(
        prepared,
        client=client,
        timeout=config.timeout or settings.timeout,
        request_timeout=config.timeout,
    )
    responded_at = datetime.now()

    logger.info(f"   ✓ Received response: {raw.status_code}")
    response = finalize_response(raw, hooks, requested_at, responded_at)
    log_record = _log_if_enabled(config, hooks, settings, prepared, response)
    return PipelineResult(request=prepared, response=response, log_record=log_record)


async def run_pipeline_async(
    config: RequestConfig,
    hooks: Hooks,
    client: httpx.AsyncClient | None = None,
    settings: ResterSettings | None = None,
) -> PipelineResult:
    """Async counterpart of run_pipeline().

    The access log is written in a worker thread so file and database
    writes do not block the event loop.
    """
    settings = settings or get_settings()
    prepared = prepare_request(config, hooks)
    logger.info(f"🌐 {prepared.method.value.upper()} {prepared.url}")

    requested_at = datetime.now()
    raw = await dispatch_async(
        prepared,
        client=client,
        timeout=config.timeout or settings.timeout,
        request_timeout=config.timeout,
    )
    responded_at = datetime.now()

    logger.info(f"   ✓ Received response: {raw.status_code}")
    response = finalize_response(raw, hooks, requested_at, responded_at)
    log_record = await anyio.to_thread.run_sync(
        _log_if_enabled, config, hooks, settings, prepared, response
    )
    return PipelineResult(request=prepared, response=response, log_record=log_record)
