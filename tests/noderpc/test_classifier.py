"""
Tests for error classification
"""
import itertools

import pytest

from noderpc.classifier import (
    RECOVERABLE_ERRORS,
    ErrorCategory,
    classify,
    is_legacy_node_error,
    is_malformed_error,
    is_recoverable_error,
)
from noderpc.error_codes import (
    RpcErrorCodes,
    RpcErrorMessages,
    well_known_codes,
    well_known_messages,
)
from noderpc.models import RpcError, RpcErrorData

ALL_PAIRS = list(itertools.product(sorted(well_known_codes()), sorted(well_known_messages())))
FATAL_PAIRS = [
    (code, message) for code, message in ALL_PAIRS
    if code != RpcErrorCodes.JSON_RPC_LEGACY_NODE_ERROR and (code, message) not in RECOVERABLE_ERRORS
]


class TestRecoverableTable:
    """Test the transient-failure allow-list"""

    @pytest.mark.parametrize("code,message", sorted(RECOVERABLE_ERRORS))
    def test_table_entries_are_recoverable(self, code, message):
        assert classify(RpcError(code=code, message=message)) is ErrorCategory.RECOVERABLE

    def test_table_contents(self):
        assert RECOVERABLE_ERRORS == {
            (-32003, "Unable to acquire database lock"),
            (-32000, "Unknown exception"),
            (-32603, "Internal Error"),
            (1100, "Upstream response error"),
        }

    @pytest.mark.parametrize("code,message", FATAL_PAIRS)
    def test_well_known_pairs_outside_table_are_fatal(self, code, message):
        """Every well-formed pair not in the table, except the legacy sentinel, is fatal"""
        assert classify(RpcError(code=code, message=message)) is ErrorCategory.FATAL

    def test_message_must_match_exactly(self):
        error = RpcError(code=RpcErrorCodes.JSON_RPC_INTERNAL_ERROR, message="internal error")
        assert classify(error) is ErrorCategory.FATAL

    def test_data_does_not_affect_category(self):
        error = RpcError(
            code=RpcErrorCodes.JSON_RPC_SERVER_ERROR,
            message=RpcErrorMessages.UNKNOWN_EXCEPTION,
            data=RpcErrorData(name="fc::exception", exception="boom"),
        )
        assert classify(error) is ErrorCategory.RECOVERABLE

    def test_custom_table(self):
        error = RpcError(code=RpcErrorCodes.JSON_RPC_METHOD_NOT_FOUND, message="nope")
        table = {(RpcErrorCodes.JSON_RPC_METHOD_NOT_FOUND, "nope")}
        assert classify(error, table) is ErrorCategory.RECOVERABLE
        assert is_recoverable_error(error, table) is True
        assert is_recoverable_error(error) is False


class TestLegacySentinel:
    """Test the legacy-node sentinel"""

    @pytest.mark.parametrize("message", sorted(well_known_messages()) + ["anything"])
    def test_sentinel_is_legacy_dialect(self, message):
        assert classify(RpcError(code=1, message=message)) is ErrorCategory.LEGACY_DIALECT

    def test_sentinel_without_message_is_legacy_dialect(self):
        error = RpcError(code=RpcErrorCodes.JSON_RPC_LEGACY_NODE_ERROR)
        assert is_legacy_node_error(error) is True
        assert classify(error) is ErrorCategory.LEGACY_DIALECT


class TestMalformed:
    """Test errors breaking the envelope contract"""

    def test_missing_code(self):
        assert classify(RpcError(message=RpcErrorMessages.INTERNAL_ERROR)) is ErrorCategory.MALFORMED

    def test_missing_message(self):
        error = RpcError(code=RpcErrorCodes.JSON_RPC_INTERNAL_ERROR)
        assert classify(error) is ErrorCategory.MALFORMED

    def test_missing_both(self):
        assert classify(RpcError()) is ErrorCategory.MALFORMED

    def test_bare_sentinel_envelope_is_malformed(self):
        assert is_malformed_error(RpcError(code=RpcErrorCodes.JSON_RPC_LEGACY_NODE_ERROR)) is True
        assert is_malformed_error(RpcError(code=1, message="legacy")) is False


def test_unknown_codes_are_fatal():
    assert classify(RpcError(code=42, message="Unknown exception")) is ErrorCategory.FATAL
    assert classify(RpcError(code=-1, message="")) is ErrorCategory.FATAL
