"""Shared pytest fixtures and constants for the dealmaker test suite.

Guidelines
----------
* No network access beyond the loopback JSON-RPC stub in test_local_node.
* Elsewhere web3 is mocked at the infra boundary.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

# CIDv1 (dag-pb, sha2-256) in canonical base32.
PIECE_CID = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"
# CIDv0 (base58btc multihash).
PAYLOAD_CID = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"

# Well-known development key; never funded on a real network.
PRIVATE_KEY = "ac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
PRIVATE_KEY_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# EIP-55 reference address.
CHECKSUM_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
CONTRACT_ADDRESS = "0x0000000000000000000000000000000000000001"

TX_HASH = "0x" + "ab" * 32


@pytest.fixture(autouse=True)
def _reset_dealmaker_logger() -> Iterator[None]:
    """Undo handler changes made by ``configure_logging`` between tests."""
    yield
    logger = logging.getLogger("dealmaker")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def create_options() -> dict[str, object]:
    """Raw option mapping for a valid ``create`` invocation."""
    return {
        "rpc-endpoint": "http://localhost:8545",
        "contract": CONTRACT_ADDRESS,
        "piece-cid": PIECE_CID,
        "piece-size": 1024,
        "verified": False,
        "payload-cid": PAYLOAD_CID,
        "start-epoch": 100,
        "end-epoch": 200,
        "location-ref": "http://example.com/f.car",
        "car-size": 2048,
        "private-key": PRIVATE_KEY,
        "chain-id": 314,
    }


@pytest.fixture()
def status_options() -> dict[str, object]:
    """Raw option mapping for a valid ``status`` invocation."""
    return {
        "rpc-endpoint": "http://localhost:8545",
        "contract": CONTRACT_ADDRESS,
        "piece-cid": PIECE_CID,
    }
