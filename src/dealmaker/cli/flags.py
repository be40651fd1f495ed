"""Flag validation — raw option mapping to typed flag bundles.

:func:`validate_create_flags` and :func:`validate_status_flags` take a
mapping of option name (``"rpc-endpoint"``, ``"piece-cid"``, ...) to
the loosely-typed value the user supplied and return a frozen
:class:`~dealmaker.core.models.CreateFlags` /
:class:`~dealmaker.core.models.StatusFlags`, or raise a
:class:`~dealmaker.exceptions.ValidationError` subclass.

Validation is a pure function of its input: no network access, no
side effects.  Every failure, the private key included, surfaces as an
exception; the caller decides the exit behaviour.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from dealmaker.core.models import CreateFlags, StatusFlags
from dealmaker.exceptions import ParseError
from dealmaker.infra.accounts import load_signing_key, parse_address
from dealmaker.infra.cid_codec import decode_cid

INT64_MIN: int = -(1 << 63)
INT64_MAX: int = (1 << 63) - 1

RPC_SCHEMES: tuple[str, ...] = ("http", "https", "ws", "wss")


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------

def _require(raw: Mapping[str, Any], name: str) -> Any:
    value = raw.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ParseError(
            f"--{name} is required.",
            hint=f"Pass --{name} on the command line.",
        )
    return value


def parse_url(
    value: str,
    *,
    field: str,
    schemes: tuple[str, ...] | None = None,
) -> str:
    """Return *value* stripped if it is an absolute URL.

    With *schemes* the scheme must be one of them and the URL must name
    a host.  Without, any scheme is accepted as long as something
    follows it (a network location or an opaque part).

    Raises
    ------
    ParseError
        If *value* is malformed, relative, or uses a scheme outside *schemes*.
    """
    stripped = str(value).strip()
    try:
        parts = urlsplit(stripped)
        # Accessing the port validates it.
        parts.port
    except ValueError as exc:
        raise ParseError(f"--{field} is not a valid URL: {stripped}") from exc

    if schemes is None:
        if not parts.scheme or not (parts.netloc or parts.path):
            raise ParseError(
                f"--{field} is not a valid URL: {stripped}",
                hint="URL must be absolute, e.g. https://host/file.car or ipfs://<cid>.",
            )
        return stripped

    if parts.scheme.lower() not in schemes or not parts.hostname:
        raise ParseError(
            f"--{field} is not a valid URL: {stripped}",
            hint=f"URL must start with {' or '.join(s + '://' for s in schemes)} and name a host.",
        )
    return stripped


def parse_int64(value: Any, *, field: str) -> int:
    """Coerce *value* to a signed 64-bit integer.

    No range policy beyond the 64-bit width is applied: zero and
    negative values pass through.
    """
    if isinstance(value, bool):
        raise ParseError(f"--{field} must be an integer, got a boolean.")
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip(), 10)
        except ValueError as exc:
            raise ParseError(f"--{field} must be an integer: {value!r}") from exc

    if not INT64_MIN <= number <= INT64_MAX:
        raise ParseError(f"--{field} does not fit in a signed 64-bit integer: {number}")
    return number


def _int_or_zero(raw: Mapping[str, Any], name: str) -> int:
    value = raw.get(name)
    if value is None:
        return 0
    return parse_int64(value, field=name)


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", ""})


def parse_bool(value: Any, *, field: str) -> bool:
    """Coerce *value* to a boolean; ``None`` means ``False``."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ParseError(f"--{field} must be a boolean: {value!r}")


# ---------------------------------------------------------------------------
# Bundle validators
# ---------------------------------------------------------------------------

def validate_status_flags(raw: Mapping[str, Any]) -> StatusFlags:
    """Validate the options of the ``status`` command.

    Raises
    ------
    ParseError
        If the endpoint URL or piece CID is malformed or missing.
    InvalidAddressError
        If the contract address fails the format or checksum check.
    """
    return StatusFlags(
        rpc_endpoint=parse_url(
            _require(raw, "rpc-endpoint"), field="rpc-endpoint", schemes=RPC_SCHEMES,
        ),
        contract=parse_address(str(raw.get("contract") or ""), field="--contract"),
        piece_cid=decode_cid(str(_require(raw, "piece-cid")), field="--piece-cid"),
    )


def validate_create_flags(raw: Mapping[str, Any]) -> CreateFlags:
    """Validate the options of the ``create`` command.

    Fields are checked in a fixed order and the first failure is
    raised.  The private key is decoded last.

    Raises
    ------
    ParseError
        If a URL, CID or integer is malformed, or a required flag is missing.
    InvalidAddressError
        If the contract address fails the format or checksum check.
    KeyDecodeError
        If the private key is malformed.
    """
    rpc_endpoint = parse_url(
        _require(raw, "rpc-endpoint"), field="rpc-endpoint", schemes=RPC_SCHEMES,
    )
    contract = parse_address(str(raw.get("contract") or ""), field="--contract")
    piece_cid = decode_cid(str(_require(raw, "piece-cid")), field="--piece-cid")
    payload_cid = decode_cid(str(_require(raw, "payload-cid")), field="--payload-cid")
    location_ref = parse_url(_require(raw, "location-ref"), field="location-ref")
    chain_id = parse_int64(_require(raw, "chain-id"), field="chain-id")
    private_key = load_signing_key(str(raw.get("private-key") or ""))

    return CreateFlags(
        rpc_endpoint=rpc_endpoint,
        contract=contract,
        piece_cid=piece_cid,
        piece_size=_int_or_zero(raw, "piece-size"),
        verified=parse_bool(raw.get("verified"), field="verified"),
        payload_cid=payload_cid,
        start_epoch=_int_or_zero(raw, "start-epoch"),
        end_epoch=_int_or_zero(raw, "end-epoch"),
        location_ref=location_ref,
        car_size=_int_or_zero(raw, "car-size"),
        private_key=private_key,
        chain_id=chain_id,
    )
