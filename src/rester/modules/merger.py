"""Header & Payload Merger.

Combines caller-supplied values with capability defaults.
"""

from typing import Any, Callable, TypeVar

V = TypeVar("V")


def merge_defaults(defaults: dict[str, V], supplied: dict[str, V]) -> dict[str, V]:
    """Flat key-union of two mappings where supplied values win.

    Key order follows the defaults first, then keys only present in the
    supplied mapping. Nested mappings are replaced, not merged.
    """
    merged = dict(defaults)
    merged.update(supplied)
    return merged


def apply_defaults(
    supplied: dict[str, V],
    provider: Callable[[], dict[str, V]] | None,
) -> dict[str, V]:
    """Merge the provider's defaults under the supplied mapping, if any."""
    if provider is None:
        return dict(supplied)
    return merge_defaults(provider() or {}, supplied)


def merge_headers_and_payload(
    headers: dict[str, str],
    payload: dict[str, Any],
    default_headers: Callable[[], dict[str, str]] | None = None,
    default_payload: Callable[[], dict[str, Any]] | None = None,
) -> tuple[dict[str, str], dict[str, Any]]:
    """Apply header and payload defaults in one step."""
    return (
        apply_defaults(headers, default_headers),
        apply_defaults(payload, default_payload),
    )
