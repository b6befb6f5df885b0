# tests/9_integration/test_exceptions.py
"""Tests for how launchrc.cli.main() reports failures."""

import logging

import pytest

import launchrc.cli as mod_cli
import launchrc.logs as mod_logs
import launchrc.utils_logs as mod_utils_logs
from launchrc.errors import ExitCode, LaunchrcError, UnexpectedReadError
from tests.utils import patch_everywhere


def test_main_handles_controlled_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A LaunchrcError is logged cleanly and its code returned."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "mocked resolution failure"
        raise LaunchrcError(xmsg)

    # --- patch and execute ---
    patch_everywhere(monkeypatch, mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == ExitCode.BAD_ARGV
    out = capsys.readouterr().err.lower()
    assert "mocked resolution failure" in out


def test_main_returns_error_specific_code(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    # --- stubs ---
    def fake_parser() -> object:
        raise UnexpectedReadError("/x.rc")

    # --- patch and execute ---
    patch_everywhere(monkeypatch, mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == ExitCode.INTERNAL_ERROR


def test_main_handles_unexpected_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Anything else is an internal error."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "boom!"
        raise OSError(xmsg)

    # --- patch and execute ---
    patch_everywhere(monkeypatch, mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == ExitCode.INTERNAL_ERROR
    out = capsys.readouterr().err.lower()
    assert "unexpected internal error" in out
    assert "boom!" in out


def test_main_fallbacks_to_safe_log(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """If logging itself fails, safe_log() reports instead."""
    # --- setup ---
    called: dict[str, str] = {}

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "simulated fail"
        raise LaunchrcError(xmsg)

    def fake_safe_log(msg: str) -> None:
        called["msg"] = msg

    class BoomHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:  # noqa: ARG002
            xmsg = "handler exploded"
            raise RuntimeError(xmsg)

    # --- patch and execute ---
    patch_everywhere(monkeypatch, mod_cli, "_setup_parser", fake_parser)
    patch_everywhere(monkeypatch, mod_utils_logs, "safe_log", fake_safe_log)

    logger = mod_logs.get_app_logger()
    old_handlers = list(logger.handlers)
    old_level = logger.level

    try:
        # make sure the stream is recorded so our handler is not replaced
        logger.ensure_handlers()
        logger.handlers = [BoomHandler()]
        logger.setLevel(logging.INFO)
        code = mod_cli.main([])
    finally:
        logger.handlers = old_handlers
        logger.ensure_handlers()
        logger.setLevel(old_level)

    # --- verify ---
    assert code == ExitCode.BAD_ARGV
    assert "Logging failed while reporting" in called["msg"]
    assert "simulated fail" in called["msg"]
