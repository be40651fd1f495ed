"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from dealmaker.core.models import (
        BoundSigner,
        DealRequest,
        PieceStatusValue,
        TransactionHandle,
    )


class TransactionSigner(Protocol):
    """A local account able to sign transactions.

    ``eth_account``'s ``LocalAccount`` satisfies this protocol
    structurally.
    """

    @property
    def address(self) -> str:
        """Checksummed address of the account."""
        ...  # pragma: no cover

    def sign_transaction(self, transaction_dict: dict[str, Any]) -> Any:
        """Sign *transaction_dict* and return the signed transaction."""
        ...  # pragma: no cover


class DealContractGateway(Protocol):
    """Contract for the remote deal-client contract façade.

    Both operations are synchronous and attempted exactly once.
    Implementations must map all backend-specific exceptions to
    :class:`~dealmaker.exceptions.DealmakerError` subclasses.
    """

    def propose_deal(
        self,
        signer: BoundSigner,
        request: DealRequest,
    ) -> TransactionHandle:
        """Sign and submit a deal proposal; return without waiting for inclusion.

        Raises
        ------
        TransportError
            When the RPC endpoint cannot be reached.
        SubmissionError
            When the node rejects the transaction.
        """
        ...  # pragma: no cover

    def piece_status(self, piece_cid: bytes) -> PieceStatusValue:
        """Read the recorded status of *piece_cid* (no signature, no state change).

        Raises
        ------
        TransportError
            When the RPC endpoint cannot be reached.
        CallRevertedError
            When the contract rejects the read.
        """
        ...  # pragma: no cover
