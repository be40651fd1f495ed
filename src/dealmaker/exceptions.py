"""Custom exception hierarchy for dealmaker.

All exceptions that cross layer boundaries must inherit from
:class:`DealmakerError`.  Raw third-party exceptions (web3, eth-account,
multiformats, requests) must NEVER propagate beyond the infrastructure
layer — they are caught there and re-raised as a typed subclass defined
here.

Hierarchy
---------
DealmakerError
├── ValidationError
│   ├── ParseError
│   ├── InvalidAddressError
│   └── KeyDecodeError
├── TransportError
├── SubmissionError
├── CallRevertedError
└── EnvironmentError
"""

from __future__ import annotations


class DealmakerError(Exception):
    """Base exception for all dealmaker errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class ValidationError(DealmakerError):
    """Raised when a command input fails validation.

    Validation always completes before any network call is attempted.
    """


class ParseError(ValidationError):
    """Raised when a URL, CID or integer input is malformed."""


class InvalidAddressError(ValidationError):
    """Raised when an account address fails the format or checksum check."""


class KeyDecodeError(ValidationError):
    """Raised when the private key is not a valid hex-encoded secp256k1 key.

    The message never contains the key material.
    """


# --- Remote contract calls -------------------------------------------------

class TransportError(DealmakerError):
    """Raised when the RPC endpoint is unreachable or times out."""


class SubmissionError(DealmakerError):
    """Raised when the remote node rejects a signed transaction."""


class CallRevertedError(DealmakerError):
    """Raised when a read-only contract call is rejected."""


# --- Environment -----------------------------------------------------------

class EnvironmentError(DealmakerError):
    """Raised when a required runtime dependency is not available."""


def missing_dependency(package: str) -> EnvironmentError:
    """Build the error raised when *package* cannot be imported."""
    return EnvironmentError(
        f"{package} is not installed.",
        hint=f"Install with: pip install {package}",
    )
