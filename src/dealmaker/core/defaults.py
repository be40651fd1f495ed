"""Named policy defaults applied by the deal request builder.

This tool does not negotiate price: the contract or the market sets
real pricing, so every monetary field is submitted as zero.  Changing
policy means changing this module only.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DealDefaults:
    """Fixed values the builder fills into every deal request."""

    storage_price_per_epoch: int = 0
    provider_collateral: int = 0
    client_collateral: int = 0
    skip_ipni_announce: bool = False
    remove_unsealed_copy: bool = False


DEAL_DEFAULTS = DealDefaults()
