"""web3-backed implementation of :class:`~dealmaker.core.protocols.DealContractGateway`.

This module is the **only** place in the codebase that imports ``web3``.
Every call is attempted exactly once.  Connection failures are
re-raised as :class:`~dealmaker.exceptions.TransportError`; node-side
rejections as :class:`~dealmaker.exceptions.SubmissionError` (writes)
or :class:`~dealmaker.exceptions.CallRevertedError` (reads).
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from typing import Any
from urllib.parse import urlsplit

from dealmaker.core.models import (
    BoundSigner,
    DealRequest,
    PieceStatusValue,
    TransactionHandle,
)
from dealmaker.exceptions import (
    CallRevertedError,
    SubmissionError,
    TransportError,
    missing_dependency,
)

logger = logging.getLogger(__name__)

DEFAULT_RPC_TIMEOUT_SECONDS: int = 30
"""Per-request timeout handed to the web3 provider (HTTP or WebSocket)."""

_ABI_RESOURCE = "abi/deal_client.json"


def load_deal_client_abi() -> list[dict[str, Any]]:
    """Load the bundled deal-client contract ABI."""
    abi_file = resources.files("dealmaker.infra").joinpath(_ABI_RESOURCE)
    with abi_file.open(encoding="utf-8") as fh:
        abi: list[dict[str, Any]] = json.load(fh)
    return abi


def deal_request_to_abi(request: DealRequest) -> tuple[Any, ...]:
    """Flatten *request* into the tuple shape of the contract's ``DealRequest`` struct."""
    params = request.extra_params
    return (
        request.piece_cid,
        request.piece_size,
        request.verified_deal,
        request.label,
        request.start_epoch,
        request.end_epoch,
        request.storage_price_per_epoch,
        request.provider_collateral,
        request.client_collateral,
        request.extra_params_version,
        (
            params.location_ref,
            params.car_size,
            params.skip_ipni_announce,
            params.remove_unsealed_copy,
        ),
    )


def _transport_errors() -> tuple[type[BaseException], ...]:
    """Exception types that mean the endpoint was never reached."""
    import requests

    return (
        requests.exceptions.ConnectionError,
        requests.exceptions.Timeout,
        ConnectionError,
        TimeoutError,
    )


def _error_reason(exc: Exception) -> str:
    """Extract the node's message from a JSON-RPC error when present."""
    if exc.args and isinstance(exc.args[0], dict):
        payload = exc.args[0]
        reason = payload.get("message") or payload.get("reason")
        if reason:
            return str(reason)
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or type(exc).__name__


def make_provider(rpc_endpoint: str, timeout: int) -> Any:
    """Pick the web3 provider matching the endpoint's scheme.

    ``ws://`` and ``wss://`` get the synchronous WebSocket provider;
    everything else is treated as HTTP(S).
    """
    try:
        from web3 import HTTPProvider, LegacyWebSocketProvider
    except ModuleNotFoundError as exc:
        raise missing_dependency("web3") from exc

    scheme = urlsplit(rpc_endpoint).scheme.lower()
    if scheme in ("ws", "wss"):
        return LegacyWebSocketProvider(rpc_endpoint, websocket_timeout=timeout)
    return HTTPProvider(rpc_endpoint, request_kwargs={"timeout": timeout})


class Web3DealClientGateway:
    """Concrete :class:`DealContractGateway` backed by web3.py.

    Usage::

        gateway = Web3DealClientGateway("http://localhost:8545", "0x...")
        status = gateway.piece_status(piece_cid_bytes)

    Constructing the gateway performs no network I/O; the provider only
    dials on the first call.  A pre-built ``Web3`` instance may be
    injected for testing.
    """

    def __init__(
        self,
        rpc_endpoint: str,
        contract_address: str,
        *,
        timeout: int = DEFAULT_RPC_TIMEOUT_SECONDS,
        web3: Any | None = None,
    ) -> None:
        self._rpc_endpoint: str = rpc_endpoint
        self._contract_address: str = contract_address
        self._timeout: int = timeout
        self._web3: Any | None = web3
        self._contract: Any | None = None

    # ------------------------------------------------------------------
    # Lazy wiring
    # ------------------------------------------------------------------

    def _w3(self) -> Any:
        if self._web3 is None:
            try:
                from web3 import Web3
            except ModuleNotFoundError as exc:
                raise missing_dependency("web3") from exc

            self._web3 = Web3(make_provider(self._rpc_endpoint, self._timeout))
        return self._web3

    def _deal_client(self) -> Any:
        if self._contract is None:
            self._contract = self._w3().eth.contract(
                address=self._contract_address,
                abi=load_deal_client_abi(),
            )
        return self._contract

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def propose_deal(
        self,
        signer: BoundSigner,
        request: DealRequest,
    ) -> TransactionHandle:
        """Sign and submit ``makeDealProposal(request)``.

        Returns as soon as the node accepts the raw transaction; the
        receipt is not awaited.

        Raises
        ------
        TransportError
            When the RPC endpoint cannot be reached.
        SubmissionError
            When gas estimation reverts or the node rejects the transaction.
        """
        from eth_utils import to_hex

        w3 = self._w3()
        contract = self._deal_client()

        try:
            nonce = w3.eth.get_transaction_count(signer.address, "pending")
            tx = contract.functions.makeDealProposal(
                deal_request_to_abi(request),
            ).build_transaction(
                {
                    "from": signer.address,
                    "chainId": signer.chain_id,
                    "nonce": nonce,
                }
            )
            logger.debug(
                "Built transaction nonce=%s gas=%s chainId=%s",
                tx.get("nonce"),
                tx.get("gas"),
                tx.get("chainId"),
            )
            signed = signer.account.sign_transaction(tx)
            tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        except _transport_errors() as exc:
            raise TransportError(
                f"Could not reach RPC endpoint {self._rpc_endpoint}: {exc}",
                hint="Check --rpc-endpoint and that the node is running.",
            ) from exc
        except Exception as exc:
            raise SubmissionError(
                f"Deal proposal rejected: {_error_reason(exc)}",
            ) from exc

        return TransactionHandle(tx_hash=to_hex(tx_hash))

    def piece_status(self, piece_cid: bytes) -> PieceStatusValue:
        """Call ``pieceStatus(piece_cid)`` without signing.

        Raises
        ------
        TransportError
            When the RPC endpoint cannot be reached.
        CallRevertedError
            When the call reverts or returns undecodable data.
        """
        contract = self._deal_client()

        try:
            code = contract.functions.pieceStatus(piece_cid).call()
        except _transport_errors() as exc:
            raise TransportError(
                f"Could not reach RPC endpoint {self._rpc_endpoint}: {exc}",
                hint="Check --rpc-endpoint and that the node is running.",
            ) from exc
        except Exception as exc:
            raise CallRevertedError(
                f"pieceStatus call rejected: {_error_reason(exc)}",
                hint="Check --contract points at a deployed deal client.",
            ) from exc

        return PieceStatusValue(code=int(code))
