"""Content-identifier codec backed by ``multiformats``.

This module is the **only** place in the codebase that imports
``multiformats``.  Decoding failures are re-raised as
:class:`~dealmaker.exceptions.ParseError`.
"""

from __future__ import annotations

from typing import Any

from dealmaker.core.models import ContentId
from dealmaker.exceptions import ParseError, missing_dependency


def _cid_class() -> Any:
    """Return ``multiformats.CID`` or raise ``EnvironmentError``."""
    try:
        from multiformats import CID
    except ModuleNotFoundError as exc:
        raise missing_dependency("multiformats") from exc
    return CID


def canonical_text(cid: Any) -> str:
    """Render *cid* in its canonical string form.

    CIDv0 only exists in base58btc; CIDv1 is rendered in base32
    regardless of the base it was parsed from.
    """
    if cid.version == 0:
        return str(cid.encode())
    return str(cid.encode("base32"))


def decode_cid(text: str, *, field: str = "CID") -> ContentId:
    """Decode *text* into a :class:`ContentId`.

    Raises
    ------
    ParseError
        If *text* is empty or not a valid CID.
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError(f"{field} must not be empty.")

    cid_class = _cid_class()
    try:
        cid = cid_class.decode(stripped)
    except Exception as exc:
        raise ParseError(
            f"Invalid {field}: {stripped}",
            hint="Expected a multibase-encoded CID such as bafy... or Qm...",
        ) from exc

    return ContentId(binary=bytes(cid), text=canonical_text(cid))


def encode_cid(binary: bytes) -> str:
    """Render a binary CID in its canonical string form.

    Raises
    ------
    ParseError
        If *binary* is not a valid binary CID.
    """
    cid_class = _cid_class()
    try:
        cid = cid_class.decode(binary)
    except Exception as exc:
        raise ParseError(f"Invalid binary CID: {binary.hex()}") from exc
    return canonical_text(cid)
