"""Unit tests for the Endpoint Resolver."""

import pytest

from rester.contracts import Hooks
from rester.modules.endpoint_resolver import join_endpoint, resolve_endpoint
from rester.types import EndpointJoin, RequestConfig


class TestResolveEndpoint:
    """Tests for endpoint resolution order."""

    def test_overwritten_endpoint_used_as_is(self):
        """An overwritten endpoint ignores every other part."""
        config = RequestConfig(
            base_url="https://ignored.example.com",
            endpoint="https://api.example.com/exact",
            endpoint_overwritten=True,
            append_endpoint="/ignored",
        )
        hooks = Hooks(final_endpoint=lambda: "https://also-ignored.example.com")
        assert resolve_endpoint(config, hooks) == "https://api.example.com/exact"

    def test_final_endpoint_capability_with_append(self):
        """The final endpoint capability is followed by the appended segment."""
        config = RequestConfig(base_url="https://ignored.example.com", append_endpoint="/42")
        hooks = Hooks(final_endpoint=lambda: "https://api.example.com/users")
        assert resolve_endpoint(config, hooks) == "https://api.example.com/users/42"

    def test_configured_base_and_route(self):
        """Without capabilities the configured parts are concatenated."""
        config = RequestConfig(
            base_url="https://api.example.com",
            api_route="/v1",
            append_endpoint="/users",
        )
        assert resolve_endpoint(config, Hooks()) == "https://api.example.com/v1/users"

    def test_capabilities_override_configured_parts(self):
        """Base URL and API route capabilities win over stored values."""
        config = RequestConfig(base_url="https://old.example.com", api_route="/old")
        hooks = Hooks(
            base_url=lambda: "https://new.example.com",
            api_route=lambda: "/v2",
        )
        assert resolve_endpoint(config, hooks) == "https://new.example.com/v2"

    def test_empty_configuration_resolves_empty(self):
        """Nothing configured resolves to an empty endpoint."""
        assert resolve_endpoint(RequestConfig(), Hooks()) == ""

    def test_normalize_mode_used_from_config(self):
        """The configured join mode is applied."""
        config = RequestConfig(
            base_url="https://api.example.com/",
            api_route="/v1/",
            append_endpoint="/users",
            join_mode=EndpointJoin.NORMALIZE,
        )
        assert resolve_endpoint(config, Hooks()) == "https://api.example.com/v1/users"


class TestJoinEndpoint:
    """Tests for the join modes."""

    def test_concat_keeps_separators_verbatim(self):
        """CONCAT does not touch duplicate slashes."""
        assert join_endpoint(["https://a.io/", "/v1"], EndpointJoin.CONCAT) == "https://a.io//v1"

    @pytest.mark.parametrize(
        "parts,expected",
        [
            (["https://a.io", "v1", "users"], "https://a.io/v1/users"),
            (["https://a.io/", "/v1/", "/users"], "https://a.io/v1/users"),
            (["https://a.io", "", "users/"], "https://a.io/users/"),
            (["https://a.io", "/v1", "?page=2"], "https://a.io/v1?page=2"),
            (["", "", ""], ""),
        ],
    )
    def test_normalize(self, parts, expected):
        """NORMALIZE puts exactly one slash between non-empty parts."""
        assert join_endpoint(parts, EndpointJoin.NORMALIZE) == expected
