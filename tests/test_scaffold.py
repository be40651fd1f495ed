"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from dealmaker import __version__
from dealmaker.cli import exit_codes
from dealmaker.cli.app import main
from dealmaker.exceptions import (
    CallRevertedError,
    DealmakerError,
    EnvironmentError,
    InvalidAddressError,
    KeyDecodeError,
    ParseError,
    SubmissionError,
    TransportError,
    ValidationError,
    missing_dependency,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ValidationError,
            ParseError,
            InvalidAddressError,
            KeyDecodeError,
            TransportError,
            SubmissionError,
            CallRevertedError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[DealmakerError]
    ) -> None:
        assert issubclass(exc_class, DealmakerError)

    @pytest.mark.parametrize("exc_class", [ParseError, InvalidAddressError, KeyDecodeError])
    def test_validation_errors_grouped(self, exc_class: type[DealmakerError]) -> None:
        assert issubclass(exc_class, ValidationError)

    @pytest.mark.parametrize("exc_class", [TransportError, SubmissionError, CallRevertedError])
    def test_remote_errors_are_not_validation_errors(
        self, exc_class: type[DealmakerError]
    ) -> None:
        assert not issubclass(exc_class, ValidationError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(DealmakerError, Exception)

    def test_hint_is_stored(self) -> None:
        err = DealmakerError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = DealmakerError("boom")
        assert err.hint is None

    def test_missing_dependency_hint(self) -> None:
        err = missing_dependency("web3")
        assert isinstance(err, EnvironmentError)
        assert "web3 is not installed" in str(err)
        assert err.hint == "Install with: pip install web3"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "create" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_unknown_command_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["delete"])
        assert exc_info.value.code == 2

    def test_create_routes_to_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from dealmaker.cli import app as app_module

        seen: list[str] = []
        monkeypatch.setattr(
            app_module, "_handle_create", lambda args: seen.append(args.command) or exit_codes.SUCCESS,
        )
        assert main(["create"]) == exit_codes.SUCCESS
        assert seen == ["create"]

    def test_status_routes_to_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from dealmaker.cli import app as app_module

        seen: list[str] = []
        monkeypatch.setattr(
            app_module, "_handle_status", lambda args: seen.append(args.command) or exit_codes.SUCCESS,
        )
        assert main(["status"]) == exit_codes.SUCCESS
        assert seen == ["status"]
