"""Pure deal-request assembly.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic.  Identical flags always yield an
equal :class:`~dealmaker.core.models.DealRequest`.

Epochs and sizes are passed through without range checks; a zero piece
size or a negative epoch still produces a request.
"""

from __future__ import annotations

from dealmaker.core.defaults import DEAL_DEFAULTS, DealDefaults
from dealmaker.core.models import CreateFlags, DealRequest, ExtraParamsV1

_UINT64_MASK = (1 << 64) - 1


def as_uint64(value: int) -> int:
    """Reinterpret a signed 64-bit integer as unsigned (two's complement)."""
    return value & _UINT64_MASK


def build_extra_params(
    flags: CreateFlags,
    defaults: DealDefaults = DEAL_DEFAULTS,
) -> ExtraParamsV1:
    """Build the version 1 extra params from *flags*."""
    return ExtraParamsV1(
        location_ref=flags.location_ref,
        car_size=as_uint64(flags.car_size),
        skip_ipni_announce=defaults.skip_ipni_announce,
        remove_unsealed_copy=defaults.remove_unsealed_copy,
    )


def build_deal_request(
    flags: CreateFlags,
    defaults: DealDefaults = DEAL_DEFAULTS,
) -> DealRequest:
    """Assemble the contract-compatible deal request for *flags*.

    Piece, label and epoch fields come straight from the flags; pricing
    and collateral come from *defaults*.
    """
    return DealRequest(
        piece_cid=flags.piece_cid.binary,
        piece_size=as_uint64(flags.piece_size),
        verified_deal=flags.verified,
        label=flags.payload_cid.text,
        start_epoch=flags.start_epoch,
        end_epoch=flags.end_epoch,
        storage_price_per_epoch=defaults.storage_price_per_epoch,
        provider_collateral=defaults.provider_collateral,
        client_collateral=defaults.client_collateral,
        extra_params=build_extra_params(flags, defaults),
    )
