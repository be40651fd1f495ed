"""Domain models for dealmaker.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependency on
external packages; third-party objects (the decoded signing account)
are only referenced through the protocols in
:mod:`dealmaker.core.protocols`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Union

from dealmaker.core.protocols import TransactionSigner


# ---------------------------------------------------------------------------
# Content identifiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ContentId:
    """A decoded content identifier.

    Produced by the CID codec adapter, so both forms are known to be
    consistent with each other.
    """

    binary: bytes
    """Binary CID form, as stored on-chain."""

    text: str
    """Canonical string form (base58btc for v0, base32 for v1)."""

    def __str__(self) -> str:
        return self.text


# ---------------------------------------------------------------------------
# Versioned extra params
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExtraParamsV1:
    """Version 1 of the deal's extra parameters."""

    VERSION: ClassVar[int] = 1

    location_ref: str
    """URL the storage provider downloads the CAR file from."""

    car_size: int
    """Size of the CAR file in bytes (unsigned 64-bit)."""

    skip_ipni_announce: bool
    remove_unsealed_copy: bool

    @property
    def version(self) -> int:
        return self.VERSION


ExtraParams = Union[ExtraParamsV1]
"""Tagged union of every extra-params shape the contract understands.

The version tag is read from the variant itself, so tag and payload
cannot disagree.
"""


# ---------------------------------------------------------------------------
# Deal request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DealRequest:
    """The canonical value submitted to the deal-client contract."""

    piece_cid: bytes
    piece_size: int
    verified_deal: bool
    label: str
    start_epoch: int
    end_epoch: int
    storage_price_per_epoch: int
    provider_collateral: int
    client_collateral: int
    extra_params: ExtraParams

    @property
    def extra_params_version(self) -> int:
        """Version tag derived from the concrete extra-params variant."""
        return self.extra_params.version


# ---------------------------------------------------------------------------
# Validated command inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CreateFlags:
    """Validated inputs of the ``create`` command."""

    rpc_endpoint: str
    contract: str
    piece_cid: ContentId
    piece_size: int
    verified: bool
    payload_cid: ContentId
    start_epoch: int
    end_epoch: int
    location_ref: str
    car_size: int
    private_key: TransactionSigner = field(repr=False)
    chain_id: int


@dataclass(frozen=True, slots=True)
class StatusFlags:
    """Validated inputs of the ``status`` command."""

    rpc_endpoint: str
    contract: str
    piece_cid: ContentId


# ---------------------------------------------------------------------------
# Signing and results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BoundSigner:
    """A signing account bound to the chain id it signs for."""

    account: TransactionSigner = field(repr=False)
    chain_id: int

    @property
    def address(self) -> str:
        return self.account.address


@dataclass(frozen=True, slots=True)
class TransactionHandle:
    """Identifier of a transaction accepted by the RPC node."""

    tx_hash: str
    """``0x``-prefixed transaction hash."""

    def __str__(self) -> str:
        return self.tx_hash


class PieceStatus(IntEnum):
    """Lifecycle states the contract records per piece."""

    NONE = 0
    REQUEST_SUBMITTED = 1
    DEAL_PUBLISHED = 2
    DEAL_ACTIVATED = 3
    DEAL_TERMINATED = 4


_STATUS_LABELS: dict[PieceStatus, str] = {
    PieceStatus.NONE: "None",
    PieceStatus.REQUEST_SUBMITTED: "RequestSubmitted",
    PieceStatus.DEAL_PUBLISHED: "DealPublished",
    PieceStatus.DEAL_ACTIVATED: "DealActivated",
    PieceStatus.DEAL_TERMINATED: "DealTerminated",
}


@dataclass(frozen=True, slots=True)
class PieceStatusValue:
    """Status read back from the contract.

    Unknown codes are preserved rather than rejected so that a newer
    contract revision still yields a printable result.
    """

    code: int

    @property
    def known(self) -> PieceStatus | None:
        try:
            return PieceStatus(self.code)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        status = self.known
        if status is None:
            return f"Unknown({self.code})"
        return _STATUS_LABELS[status]

    def __str__(self) -> str:
        return str(self.code)
