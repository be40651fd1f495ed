"""Infrastructure layer — external system integration.

This layer wraps all interaction with web3, eth-account, eth-utils and
multiformats.  Every raw third-party exception must be caught here and
re-raised as a :class:`~dealmaker.exceptions.DealmakerError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from dealmaker.infra.accounts import is_valid_address, load_signing_key, parse_address
from dealmaker.infra.cid_codec import decode_cid, encode_cid
from dealmaker.infra.deal_client_gateway import (
    DEFAULT_RPC_TIMEOUT_SECONDS,
    Web3DealClientGateway,
    deal_request_to_abi,
    load_deal_client_abi,
)

__all__: list[str] = [
    "DEFAULT_RPC_TIMEOUT_SECONDS",
    "Web3DealClientGateway",
    "deal_request_to_abi",
    "decode_cid",
    "encode_cid",
    "is_valid_address",
    "load_deal_client_abi",
    "load_signing_key",
    "parse_address",
]
