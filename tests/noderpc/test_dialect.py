"""
Tests for the dialect adapter
"""
import pytest

from noderpc.dialect import (
    LEGACY_API,
    CallDescription,
    Dialect,
    DialectNotSupportedError,
    build_request,
)


class TestCallDescription:
    """Test call description value semantics"""

    def test_of_defaults(self):
        call = CallDescription.of("database_api", "get_config")
        assert call.id == 0
        assert dict(call.params) == {}
        assert call.legacy_params is None
        assert call.legacy_compatible is False

    def test_params_are_copied_and_read_only(self):
        params = {"limit": 10}
        call = CallDescription.of("market_history_api", "get_recent_trades", params, [10], id=7)
        params["limit"] = 99
        assert call.params["limit"] == 10
        with pytest.raises(TypeError):
            call.params["limit"] = 1

    def test_legacy_params_become_tuple(self):
        call = CallDescription.of("market_history_api", "get_recent_trades", {"limit": 10}, [10])
        assert call.legacy_params == (10,)
        assert call.legacy_compatible is True

    def test_empty_legacy_params_still_compatible(self):
        call = CallDescription.of("database_api", "get_dynamic_global_properties", {}, [])
        assert call.legacy_compatible is True
        assert call.supports(Dialect.LEGACY) is True

    def test_supports(self):
        call = CallDescription.of("database_api", "list_witnesses", {"limit": 1})
        assert call.supports(Dialect.CURRENT) is True
        assert call.supports(Dialect.LEGACY) is False

    def test_str(self):
        call = CallDescription.of("database_api", "get_config", id=3)
        assert str(call) == "database_api.get_config(id=3)"


class TestBuildRequest:
    """Test wire request construction"""

    def test_current_dialect(self):
        call = CallDescription.of("market_history_api", "get_recent_trades", {"limit": 10}, [10], id=5)
        request = build_request(call, Dialect.CURRENT)
        assert request.to_dict() == {
            "jsonrpc": "2.0",
            "id": 5,
            "method": "market_history_api.get_recent_trades",
            "params": {"limit": 10},
        }

    def test_legacy_dialect(self):
        call = CallDescription.of("market_history_api", "get_recent_trades", {"limit": 10}, [10], id=5)
        request = build_request(call, Dialect.LEGACY)
        assert request.to_dict() == {
            "jsonrpc": "2.0",
            "id": 5,
            "method": f"{LEGACY_API}.get_recent_trades",
            "params": [10],
        }

    def test_legacy_without_positional_params(self):
        call = CallDescription.of("database_api", "list_witnesses", {"limit": 1})
        with pytest.raises(DialectNotSupportedError):
            build_request(call, Dialect.LEGACY)

    def test_params_payload_is_plain_dict(self):
        call = CallDescription.of("database_api", "get_config", {"a": 1})
        request = build_request(call, Dialect.CURRENT)
        assert type(request.params) is dict
