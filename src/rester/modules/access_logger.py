"""Access Logger Module.

Builds the access-log record for a finished request and hands it to a
log strategy. Logging is best-effort: a failing strategy never affects
the response returned to the caller.
"""

import logging
from typing import Any

from rester.contracts import Hooks
from rester.types import AccessLogRecord, LogMerge, PreparedRequest, ResponseState

from .log_strategies import FileLog, LogStrategy


logger = logging.getLogger("rester.access_log")


def merge_log_fields(
    defaults: dict[str, Any],
    intercepted: dict[str, Any],
    mode: LogMerge = LogMerge.DEFAULTS_WIN,
) -> dict[str, Any]:
    """Combine default log fields with interceptor-supplied ones.

    Args:
        defaults: Fields built from the request and response.
        intercepted: Fields returned by the access-log interceptor.
        mode: Which side wins on key collision, or full replacement.

    Returns:
        The record to write.
    """
    if mode == LogMerge.REPLACE:
        return dict(intercepted)
    if mode == LogMerge.INTERCEPTOR_WINS:
        return {**defaults, **intercepted}
    return {**intercepted, **defaults}


def build_log_record(
    request: PreparedRequest,
    response: ResponseState,
    hooks: Hooks,
    mode: LogMerge = LogMerge.DEFAULTS_WIN,
) -> dict[str, Any]:
    """Build the access-log record for one request."""
    record = AccessLogRecord.build(request, response).model_dump()
    if hooks.access_log is None:
        return record
    return merge_log_fields(record, hooks.access_log() or {}, mode)


def select_strategy(hooks: Hooks, default_path: str) -> LogStrategy:
    """Use the definition's strategy, or append to the default file."""
    if hooks.log_strategy is not None:
        return hooks.log_strategy()
    return FileLog(default_path)


def write_access_log(
    request: PreparedRequest,
    response: ResponseState,
    hooks: Hooks,
    default_path: str,
    mode: LogMerge = LogMerge.DEFAULTS_WIN,
) -> dict[str, Any] | None:
    """Write the access log for a finished request.

    Args:
        request: The request that was sent.
        response: The response state after interception.
        hooks: Capabilities of the request definition.
        default_path: File used when no strategy capability exists.
        mode: Log merge mode.

    Returns:
        The record that was written, or None if writing failed.
    """
    try:
        record = build_log_record(request, response, hooks, mode)
        strategy = select_strategy(hooks, default_path)
        strategy.log(record)
    except Exception as e:
        logger.warning(f"   ✗ Access log not written: {e}", exc_info=True)
        return None

    logger.debug(f"   ✓ Access log written via {strategy!r}")
    return record
