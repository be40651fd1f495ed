"""Core deal service — orchestrates building and submitting deals.

Depends on a :class:`~dealmaker.core.protocols.DealContractGateway`
injected at construction time, keeping the core free of any web3
import.

Guarantees
----------
* Pure orchestration — no I/O of its own, no ``print()``.
* Only :class:`~dealmaker.exceptions.DealmakerError` subclasses escape.
* Exactly one gateway call per operation; nothing is retried.
"""

from __future__ import annotations

import logging

from dealmaker.core.deal_builder import build_deal_request
from dealmaker.core.models import (
    BoundSigner,
    CreateFlags,
    DealRequest,
    PieceStatusValue,
    StatusFlags,
    TransactionHandle,
)
from dealmaker.core.protocols import DealContractGateway
from dealmaker.exceptions import CallRevertedError, DealmakerError, SubmissionError

logger = logging.getLogger(__name__)


class DealService:
    """Stateless service driving the ``create`` and ``status`` flows.

    Parameters
    ----------
    gateway:
        Any object satisfying the :class:`DealContractGateway` protocol.
    """

    def __init__(self, gateway: DealContractGateway) -> None:
        self._gateway: DealContractGateway = gateway

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_deal(self, flags: CreateFlags) -> tuple[DealRequest, TransactionHandle]:
        """Build the deal request for *flags* and submit it once.

        Returns the submitted request together with the transaction
        handle.  The handle is returned as soon as the node accepts the
        transaction; inclusion is not awaited.

        Raises
        ------
        TransportError
            When the RPC endpoint cannot be reached.
        SubmissionError
            When the node rejects the transaction.
        """
        request = build_deal_request(flags)
        signer = BoundSigner(account=flags.private_key, chain_id=flags.chain_id)
        logger.info(
            "Proposing deal for piece %s (size=%d, epochs %d..%d) from %s on chain %d",
            flags.piece_cid,
            request.piece_size,
            request.start_epoch,
            request.end_epoch,
            signer.address,
            signer.chain_id,
        )
        try:
            handle = self._gateway.propose_deal(signer, request)
        except DealmakerError:
            raise
        except Exception as exc:
            raise SubmissionError(
                f"Unexpected gateway error: {exc}",
            ) from exc
        logger.info("Transaction %s accepted by the node", handle)
        return request, handle

    def piece_status(self, flags: StatusFlags) -> PieceStatusValue:
        """Read the on-chain status of the piece named in *flags*.

        Raises
        ------
        TransportError
            When the RPC endpoint cannot be reached.
        CallRevertedError
            When the contract rejects the read.
        """
        logger.info("Querying status of piece %s", flags.piece_cid)
        try:
            status = self._gateway.piece_status(flags.piece_cid.binary)
        except DealmakerError:
            raise
        except Exception as exc:
            raise CallRevertedError(
                f"Unexpected gateway error: {exc}",
            ) from exc
        logger.info("Piece %s status: %s", flags.piece_cid, status.label)
        return status
