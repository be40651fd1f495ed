"""Tests for DealService (core/deal_service.py).

The :class:`DealContractGateway` dependency is **mocked** — no web3, no
network.  These tests verify:

* One gateway call per operation, with the built request and bound signer
* Typed errors propagate unchanged
* Unexpected gateway errors are wrapped and chained
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from dealmaker.core.deal_service import DealService
from dealmaker.core.models import (
    BoundSigner,
    ContentId,
    CreateFlags,
    PieceStatusValue,
    StatusFlags,
    TransactionHandle,
)
from dealmaker.exceptions import CallRevertedError, SubmissionError, TransportError

PIECE = ContentId(binary=b"\x01\x55\x12\x20" + b"\x11" * 32, text="bafkpiece")
PAYLOAD = ContentId(binary=b"\x12\x20" + b"\x22" * 32, text="Qmpayload")


def _create_flags(**overrides: Any) -> CreateFlags:
    defaults: dict[str, Any] = {
        "rpc_endpoint": "http://localhost:8545",
        "contract": "0x0000000000000000000000000000000000000001",
        "piece_cid": PIECE,
        "piece_size": 1024,
        "verified": False,
        "payload_cid": PAYLOAD,
        "start_epoch": 100,
        "end_epoch": 200,
        "location_ref": "http://example.com/f.car",
        "car_size": 2048,
        "private_key": MagicMock(address="0xabc"),
        "chain_id": 314,
    }
    defaults.update(overrides)
    return CreateFlags(**defaults)


def _status_flags() -> StatusFlags:
    return StatusFlags(
        rpc_endpoint="http://localhost:8545",
        contract="0x0000000000000000000000000000000000000001",
        piece_cid=PIECE,
    )


# ---------------------------------------------------------------------------
# create_deal
# ---------------------------------------------------------------------------

class TestCreateDeal:
    def test_submits_once_with_bound_signer(self) -> None:
        gateway = MagicMock()
        gateway.propose_deal.return_value = TransactionHandle(tx_hash="0xabc123")
        flags = _create_flags()

        request, handle = DealService(gateway).create_deal(flags)

        assert handle.tx_hash == "0xabc123"
        gateway.propose_deal.assert_called_once()
        signer, sent_request = gateway.propose_deal.call_args.args
        assert signer == BoundSigner(account=flags.private_key, chain_id=314)
        assert sent_request is request
        assert request.extra_params_version == 1
        assert request.extra_params.car_size == 2048

    def test_never_reads_status(self) -> None:
        gateway = MagicMock()
        gateway.propose_deal.return_value = TransactionHandle(tx_hash="0x1")
        DealService(gateway).create_deal(_create_flags())
        gateway.piece_status.assert_not_called()

    @pytest.mark.parametrize("error", [TransportError("down"), SubmissionError("nonce too low")])
    def test_typed_errors_propagate(self, error: Exception) -> None:
        gateway = MagicMock()
        gateway.propose_deal.side_effect = error

        with pytest.raises(type(error)) as exc_info:
            DealService(gateway).create_deal(_create_flags())
        assert exc_info.value is error
        assert gateway.propose_deal.call_count == 1

    def test_unexpected_error_wrapped(self) -> None:
        gateway = MagicMock()
        original = RuntimeError("kaboom")
        gateway.propose_deal.side_effect = original

        with pytest.raises(SubmissionError, match="Unexpected") as exc_info:
            DealService(gateway).create_deal(_create_flags())
        assert exc_info.value.__cause__ is original


# ---------------------------------------------------------------------------
# piece_status
# ---------------------------------------------------------------------------

class TestPieceStatus:
    def test_queries_binary_piece_cid(self) -> None:
        gateway = MagicMock()
        gateway.piece_status.return_value = PieceStatusValue(code=2)

        status = DealService(gateway).piece_status(_status_flags())

        assert status.label == "DealPublished"
        gateway.piece_status.assert_called_once_with(PIECE.binary)
        gateway.propose_deal.assert_not_called()

    def test_reverted_propagates(self) -> None:
        gateway = MagicMock()
        gateway.piece_status.side_effect = CallRevertedError("bad piece")

        with pytest.raises(CallRevertedError, match="bad piece"):
            DealService(gateway).piece_status(_status_flags())

    def test_unexpected_error_wrapped(self) -> None:
        gateway = MagicMock()
        original = KeyError("weird")
        gateway.piece_status.side_effect = original

        with pytest.raises(CallRevertedError) as exc_info:
            DealService(gateway).piece_status(_status_flags())
        assert exc_info.value.__cause__ is original
