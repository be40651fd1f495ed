"""CLI application entry point and command routing for dealmaker.

This module is the **sole error boundary** for the entire application.
It catches :class:`~dealmaker.exceptions.DealmakerError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — validation is delegated to
  :mod:`dealmaker.cli.flags`, orchestration to the core service, and
  chain access to the infrastructure gateway.
* stdout carries exactly one line on success: the transaction hash
  (``create``) or the status code (``status``).  Everything else goes
  to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from dealmaker.cli import exit_codes
from dealmaker.cli.console import console, emit_result
from dealmaker.cli.logging_setup import configure_logging
from dealmaker.exceptions import DealmakerError
from dealmaker.infra.deal_client_gateway import DEFAULT_RPC_TIMEOUT_SECONDS
from dealmaker.version import __version__

logger = logging.getLogger(__name__)

ENV_RPC_ENDPOINT = "DEALMAKER_RPC_ENDPOINT"
ENV_CONTRACT = "DEALMAKER_CONTRACT"
ENV_PRIVATE_KEY = "DEALMAKER_PRIVATE_KEY"
ENV_CHAIN_ID = "DEALMAKER_CHAIN_ID"

CREATE_OPTIONS: tuple[str, ...] = (
    "rpc-endpoint",
    "contract",
    "piece-cid",
    "piece-size",
    "verified",
    "payload-cid",
    "start-epoch",
    "end-epoch",
    "location-ref",
    "car-size",
    "private-key",
    "chain-id",
)

STATUS_OPTIONS: tuple[str, ...] = (
    "rpc-endpoint",
    "contract",
    "piece-cid",
)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_connection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--rpc-endpoint",
        default=os.environ.get(ENV_RPC_ENDPOINT),
        help=f"Gateway RPC endpoint (env: {ENV_RPC_ENDPOINT}).",
    )
    parser.add_argument(
        "--contract",
        default=os.environ.get(ENV_CONTRACT),
        help=f"The smart contract address (env: {ENV_CONTRACT}).",
    )
    parser.add_argument("--piece-cid", help="The piece CID.")
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_RPC_TIMEOUT_SECONDS,
        help="RPC request timeout in seconds (default: %(default)s).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``dealmaker create ...``  — propose a storage deal
    * ``dealmaker status ...``  — check the on-chain status of a piece
    * ``dealmaker --version``
    """
    parser = argparse.ArgumentParser(
        prog="dealmaker",
        description="dealmaker lets you make deals using a FVM smart contract.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    create = subparsers.add_parser("create", help="Create deal.")
    _add_connection_arguments(create)
    create.add_argument("--piece-size", help="The piece size in bytes.")
    create.add_argument(
        "--verified",
        action="store_true",
        help="If it's a verified deal or not.",
    )
    create.add_argument("--payload-cid", help="The payload CID.")
    create.add_argument("--start-epoch", help="When the deal starts.")
    create.add_argument("--end-epoch", help="When the deal ends.")
    create.add_argument("--location-ref", help="Where the CAR file can be downloaded.")
    create.add_argument("--car-size", help="The size of the CAR file.")
    create.add_argument(
        "--private-key",
        default=os.environ.get(ENV_PRIVATE_KEY),
        help=f"The private key, hex encoded (env: {ENV_PRIVATE_KEY}).",
    )
    create.add_argument(
        "--chain-id",
        default=os.environ.get(ENV_CHAIN_ID),
        help=f"The network id (env: {ENV_CHAIN_ID}).",
    )

    status = subparsers.add_parser("status", help="Check the status of a deal.")
    _add_connection_arguments(status)

    return parser


def _raw_options(args: argparse.Namespace, names: Sequence[str]) -> dict[str, Any]:
    """Collect parsed arguments into a ``flag-name -> value`` mapping."""
    return {name: getattr(args, name.replace("-", "_"), None) for name in names}


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_create(args: argparse.Namespace) -> int:
    """Dispatch the ``create`` command.

    Flow:
    1. Validate every flag (no network access yet).
    2. Build the deal request and submit one signed transaction.
    3. Print the transaction hash.
    """
    from dealmaker.cli.flags import validate_create_flags
    from dealmaker.core.deal_service import DealService
    from dealmaker.infra.deal_client_gateway import Web3DealClientGateway

    flags = validate_create_flags(_raw_options(args, CREATE_OPTIONS))

    gateway = Web3DealClientGateway(
        flags.rpc_endpoint,
        flags.contract,
        timeout=args.timeout,
    )
    request, handle = DealService(gateway).create_deal(flags)

    console.print(
        "[bold green]Deal proposal submitted.[/bold green]  "
        f"piece={flags.piece_cid} extra_params_version={request.extra_params_version}"
    )
    emit_result(handle)
    return exit_codes.SUCCESS


def _handle_status(args: argparse.Namespace) -> int:
    """Dispatch the ``status`` command."""
    from dealmaker.cli.flags import validate_status_flags
    from dealmaker.core.deal_service import DealService
    from dealmaker.infra.deal_client_gateway import Web3DealClientGateway

    flags = validate_status_flags(_raw_options(args, STATUS_OPTIONS))

    gateway = Web3DealClientGateway(
        flags.rpc_endpoint,
        flags.contract,
        timeout=args.timeout,
    )
    status = DealService(gateway).piece_status(flags)

    console.print(f"[bold cyan]Piece status:[/bold cyan] {status.label}")
    emit_result(status)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the dealmaker CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    logger.debug("Running command %s", args.command)
    if args.command == "create":
        return _handle_create(args)
    return _handle_status(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DealmakerError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
