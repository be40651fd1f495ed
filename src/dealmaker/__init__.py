"""dealmaker — propose storage deals to an FVM deal-client contract.

Validates loosely-typed command inputs, assembles a contract-compatible
deal request, and talks to the contract through a thin web3 gateway.
"""

from dealmaker.version import __version__

__all__: list[str] = ["__version__"]
