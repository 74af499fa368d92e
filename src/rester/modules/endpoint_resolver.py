"""Endpoint Resolver Module.

Computes the final request URL from the configuration and the
endpoint capabilities of a request definition.
"""

from rester.contracts import Hooks
from rester.types import EndpointJoin, RequestConfig


def resolve_endpoint(config: RequestConfig, hooks: Hooks) -> str:
    """Resolve the URL a request will be sent to.

    Resolution order:
    1. An overwritten endpoint is used as-is.
    2. A final-endpoint capability, followed by the appended segment.
    3. Base URL and API route (capability values win over configured
       ones), followed by the appended segment.

    Args:
        config: Request configuration.
        hooks: Capabilities of the request definition.

    Returns:
        The resolved endpoint. May be empty; the pipeline rejects that.
    """
    if config.endpoint_overwritten:
        return config.endpoint

    if hooks.final_endpoint is not None:
        return hooks.final_endpoint() + config.append_endpoint

    base = hooks.base_url() if hooks.base_url is not None else config.base_url
    route = hooks.api_route() if hooks.api_route is not None else config.api_route

    return join_endpoint([base, route, config.append_endpoint], config.join_mode)


def join_endpoint(parts: list[str], mode: EndpointJoin = EndpointJoin.CONCAT) -> str:
    """Join endpoint parts.

    CONCAT glues the parts together verbatim. NORMALIZE puts exactly one
    "/" between non-empty parts, keeping a trailing slash on the last
    part and attaching "?query" or "#fragment" parts without a separator.
    """
    if mode == EndpointJoin.CONCAT:
        return "".join(parts)

    present = [part for part in parts if part]
    if not present:
        return ""

    url = present[0]
    for part in present[1:]:
        if part.startswith(("?", "#")):
            url += part
            continue
        url = url.rstrip("/") + "/" + part.lstrip("/")
    return url
