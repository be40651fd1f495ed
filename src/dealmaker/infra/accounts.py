"""Account address and signing-key adapters backed by eth-utils / eth-account.

Raw library exceptions never escape: malformed addresses raise
:class:`~dealmaker.exceptions.InvalidAddressError`, malformed keys
raise :class:`~dealmaker.exceptions.KeyDecodeError`.  Key material is
never included in any message or exception chain.
"""

from __future__ import annotations

import re

from dealmaker.core.protocols import TransactionSigner
from dealmaker.exceptions import InvalidAddressError, KeyDecodeError, missing_dependency

_HEX_ADDRESS = re.compile(r"0x[0-9a-fA-F]{40}")
_HEX_PRIVATE_KEY = re.compile(r"(0x)?[0-9a-fA-F]{64}")


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

def is_valid_address(text: str) -> bool:
    """Return ``True`` when *text* is a ``0x``-prefixed 20-byte hex address.

    All-lowercase and all-uppercase digits are accepted as-is; mixed
    case must match the EIP-55 checksum.
    """
    if not _HEX_ADDRESS.fullmatch(text):
        return False

    body = text[2:]
    if body in (body.lower(), body.upper()):
        return True

    try:
        from eth_utils import is_checksum_address
    except ModuleNotFoundError as exc:
        raise missing_dependency("eth-utils") from exc
    return bool(is_checksum_address(text))


def parse_address(text: str, *, field: str = "address") -> str:
    """Validate *text* and return its EIP-55 checksummed form.

    Raises
    ------
    InvalidAddressError
        If *text* fails the format or checksum check.
    """
    stripped = text.strip()
    if not is_valid_address(stripped):
        raise InvalidAddressError(
            f"{field} is not a valid account address: {stripped or '<empty>'}",
            hint="Expected 0x followed by 40 hex digits with valid checksum casing.",
        )

    from eth_utils import to_checksum_address

    return str(to_checksum_address(stripped))


# ---------------------------------------------------------------------------
# Signing keys
# ---------------------------------------------------------------------------

def load_signing_key(text: str) -> TransactionSigner:
    """Decode a hex-encoded secp256k1 private key into a local account.

    An optional ``0x`` prefix is accepted.

    Raises
    ------
    KeyDecodeError
        If *text* is not 32 bytes of hex or not a valid scalar.
    """
    stripped = text.strip()
    if not _HEX_PRIVATE_KEY.fullmatch(stripped):
        raise KeyDecodeError(
            "private key must be 64 hex characters (32 bytes).",
            hint="Pass the raw hex key, with or without a 0x prefix.",
        )

    try:
        from eth_account import Account
    except ModuleNotFoundError as exc:
        raise missing_dependency("eth-account") from exc

    try:
        return Account.from_key(stripped)
    except Exception:
        raise KeyDecodeError(
            "private key is not a valid secp256k1 key (key not shown).",
        ) from None
