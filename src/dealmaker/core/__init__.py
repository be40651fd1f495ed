"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* No third-party imports.
"""

from dealmaker.core.deal_builder import build_deal_request
from dealmaker.core.deal_service import DealService
from dealmaker.core.defaults import DEAL_DEFAULTS, DealDefaults
from dealmaker.core.models import (
    BoundSigner,
    ContentId,
    CreateFlags,
    DealRequest,
    ExtraParamsV1,
    PieceStatus,
    PieceStatusValue,
    StatusFlags,
    TransactionHandle,
)
from dealmaker.core.protocols import DealContractGateway, TransactionSigner

__all__: list[str] = [
    "BoundSigner",
    "ContentId",
    "CreateFlags",
    "DEAL_DEFAULTS",
    "DealContractGateway",
    "DealDefaults",
    "DealRequest",
    "DealService",
    "ExtraParamsV1",
    "PieceStatus",
    "PieceStatusValue",
    "StatusFlags",
    "TransactionHandle",
    "TransactionSigner",
    "build_deal_request",
]
