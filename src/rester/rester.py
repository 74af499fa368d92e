"""Rester request model.

Subclass Rester to define a reusable API call. Class attributes hold
the defaults; capability methods (see rester.contracts) customize the
endpoint, defaults, interception and logging; builder methods adjust a
single instance before send().

Example:
    class GetUser(Rester, WithBaseUrl):
        method = HttpMethod.GET

        def set_base_url(self) -> str:
            return "https://api.example.com"

    user = GetUser().append_endpoint("/users/1").send().json_to_array()
"""

import json
import logging
from typing import Any

import httpx

from rester.config import ResterSettings, get_settings
from rester.contracts import Hooks, resolve_hooks
from rester.modules.pipeline import PipelineResult, run_pipeline, run_pipeline_async
from rester.types import (
    ContentType,
    EndpointJoin,
    HttpMethod,
    LogMerge,
    PreparedRequest,
    RequestConfig,
    ResponseState,
)


logger = logging.getLogger("rester.rester")


class Rester:
    """Builder and executor for one API call."""

    base_url: str = ""
    api_route: str = ""
    method: HttpMethod = HttpMethod.POST
    content_type: ContentType = ContentType.JSON
    log: bool = False
    join_mode: EndpointJoin = EndpointJoin.CONCAT
    log_merge: LogMerge = LogMerge.DEFAULTS_WIN
    timeout: float | None = None

    def __init__(
        self,
        settings: ResterSettings | None = None,
        client: httpx.Client | httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client: httpx.Client | None = None
        self._async_client: httpx.AsyncClient | None = None
        if client is not None:
            self.with_client(client)

        self._hooks = resolve_hooks(self)
        self._config = RequestConfig(
            base_url=self.base_url,
            api_route=self.api_route,
            method=self.method,
            content_type=self.content_type,
            log=self.log,
            join_mode=self.join_mode,
            log_merge=self.log_merge,
            timeout=self.timeout,
        )
        self._result: PipelineResult | None = None

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def _update(self, **changes: Any) -> "Rester":
        self._config = self._config.model_copy(update=changes)
        return self

    def add_payload(self, data: dict[str, Any] | None = None) -> "Rester":
        return self._update(payload={**self._config.payload, **(data or {})})

    def add_headers(self, data: dict[str, str] | None = None) -> "Rester":
        return self._update(headers={**self._config.headers, **(data or {})})

    def overwrite_endpoint(self, endpoint: str) -> "Rester":
        """Send to this exact URL, skipping endpoint resolution."""
        return self._update(endpoint=endpoint, endpoint_overwritten=True)

    def append_endpoint(self, segment: str) -> "Rester":
        return self._update(append_endpoint=segment)

    def assign_base_uri(self, uri: str) -> "Rester":
        return self._update(base_url=uri)

    def assign_api_route(self, route: str) -> "Rester":
        return self._update(api_route=route)

    def with_method(self, method: HttpMethod | str) -> "Rester":
        """Set the HTTP method. Unsupported methods fail at send()."""
        return self._update(method=method)

    def with_content_type(self, content_type: ContentType) -> "Rester":
        return self._update(content_type=content_type)

    def as_json(self) -> "Rester":
        return self.with_content_type(ContentType.JSON)

    def as_multipart(self) -> "Rester":
        return self.with_content_type(ContentType.MULTIPART)

    def as_form_params(self) -> "Rester":
        return self.with_content_type(ContentType.FORM_PARAMS)

    def as_body(self, raw: str | bytes | None = None) -> "Rester":
        """Send a raw body; the payload is JSON-encoded when raw is None."""
        return self._update(content_type=ContentType.BODY, raw_body=raw)

    def with_logging(self, enabled: bool = True) -> "Rester":
        return self._update(log=enabled)

    def with_timeout(self, timeout: float) -> "Rester":
        return self._update(timeout=timeout)

    def with_client(self, client: httpx.Client | httpx.AsyncClient) -> "Rester":
        """Send through an existing client. The client is not closed."""
        if isinstance(client, httpx.AsyncClient):
            self._async_client = client
        else:
            self._client = client
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def send(self) -> "Rester":
        """Dispatch the request and store the response.

        Raises:
            ResterApiException: On configuration errors. HTTP failures
                are stored as the response instead.
        """
        self._result = run_pipeline(
            self._config, self._hooks, client=self._client, settings=self.settings
        )
        return self

    async def asend(self) -> "Rester":
        """Async counterpart of send()."""
        self._result = await run_pipeline_async(
            self._config, self._hooks, client=self._async_client, settings=self.settings
        )
        return self

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> RequestConfig:
        return self._config

    @property
    def hooks(self) -> Hooks:
        return self._hooks

    @property
    def last_request(self) -> PreparedRequest | None:
        return self._result.request if self._result else None

    @property
    def last_response(self) -> ResponseState | None:
        return self._result.response if self._result else None

    def get(self) -> dict[str, Any]:
        response = self.last_response
        return {
            "content": response.content if response else None,
            "headers": response.headers if response else None,
            "status_code": response.status_code if response else None,
        }

    def get_content(self) -> str | None:
        response = self.last_response
        return response.content if response else None

    def get_status_code(self) -> int | None:
        response = self.last_response
        return response.status_code if response else None

    def get_response_headers(self) -> dict[str, list[str]] | None:
        response = self.last_response
        return response.headers if response else None

    def json_to_array(self) -> Any:
        """Parse the response content as JSON, or None if it is not JSON."""
        content = self.get_content()
        if content is None:
            return None
        try:
            return json.loads(content)
        except ValueError:
            logger.debug("Response content is not valid JSON")
            return None

    # Values as they were before each interceptor ran

    @property
    def request_headers_before_intercept(self) -> dict[str, str] | None:
        request = self.last_request
        return request.headers_before_intercept if request else None

    @property
    def payload_before_intercept(self) -> dict[str, Any] | None:
        request = self.last_request
        return request.payload_before_intercept if request else None

    @property
    def response_before_intercept(self) -> str | None:
        response = self.last_response
        return response.content_before_intercept if response else None

    @property
    def response_headers_before_intercept(self) -> dict[str, list[str]] | None:
        response = self.last_response
        return response.headers_before_intercept if response else None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(method={self._config.method!s}, "
            f"content_type={self._config.content_type!s})"
        )
