# tests/3_independant/test_logger.py

import io
import logging
import sys

import pytest

import launchrc.logs as mod_logs
import launchrc.utils_logs as mod_utils_logs


def capture_log_output(
    monkeypatch: pytest.MonkeyPatch,
    logger: mod_logs.AppLogger,
    msg_level: str,
    *,
    msg: str | None = None,
    log_level: str = "TRACE",
) -> tuple[str, str]:
    """Capture stdout/stderr during one log call."""
    logger.setLevel(log_level.upper())
    out_buf, err_buf = io.StringIO(), io.StringIO()
    monkeypatch.setattr(sys, "stdout", out_buf)
    monkeypatch.setattr(sys, "stderr", err_buf)
    getattr(logger, msg_level.lower())(msg or f"msg:{msg_level}")
    return out_buf.getvalue(), err_buf.getvalue()


@pytest.mark.parametrize(
    "msg_level", ["trace", "debug", "info", "warning", "error", "critical"]
)
def test_every_level_goes_to_stderr(
    monkeypatch: pytest.MonkeyPatch,
    direct_logger: mod_logs.AppLogger,
    msg_level: str,
) -> None:
    """stdout is reserved for the resolved command line."""
    # --- execute ---
    out, err = capture_log_output(monkeypatch, direct_logger, msg_level)

    # --- verify ---
    assert out == ""
    assert f"msg:{msg_level}" in err


@pytest.mark.parametrize(
    ("msg_level", "tag"),
    [("info", "INFO:"), ("warning", "WARNING:"), ("error", "ERROR:")],
)
def test_tags_prefix_messages(
    monkeypatch: pytest.MonkeyPatch,
    direct_logger: mod_logs.AppLogger,
    msg_level: str,
    tag: str,
) -> None:
    # --- execute ---
    _, err = capture_log_output(monkeypatch, direct_logger, msg_level, msg="hello")

    # --- verify ---
    assert err.strip() == f"{tag} hello"


def test_level_filters_lower_messages(
    monkeypatch: pytest.MonkeyPatch,
    direct_logger: mod_logs.AppLogger,
) -> None:
    # --- execute ---
    _, err = capture_log_output(
        monkeypatch, direct_logger, "debug", log_level="warning"
    )

    # --- verify ---
    assert err == ""


def test_trace_level_registered() -> None:
    # --- execute and verify ---
    assert logging.getLevelName(mod_utils_logs.TRACE_LEVEL) == "TRACE"
    assert logging.getLevelName(mod_utils_logs.SILENT_LEVEL) == "SILENT"


def test_determine_log_level_prefers_args_then_env(
    monkeypatch: pytest.MonkeyPatch,
    direct_logger: mod_logs.AppLogger,
) -> None:
    # --- setup ---
    monkeypatch.setenv("LOG_LEVEL", "warning")

    class Args:
        log_level = "debug"

    # --- execute and verify ---
    assert direct_logger.determine_log_level(args=Args()) == "DEBUG"  # type: ignore[arg-type]
    assert direct_logger.determine_log_level() == "WARNING"
    monkeypatch.setenv("LAUNCHRC_LOG_LEVEL", "error")
    assert direct_logger.determine_log_level() == "ERROR"


def test_determine_log_level_default(direct_logger: mod_logs.AppLogger) -> None:
    # --- execute and verify ---
    assert direct_logger.determine_log_level() == "INFO"


def test_determine_color_enabled_respects_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # --- execute and verify ---
    monkeypatch.setenv("NO_COLOR", "1")
    assert mod_logs.AppLogger.determine_color_enabled() is False
    monkeypatch.delenv("NO_COLOR")
    monkeypatch.setenv("FORCE_COLOR", "yes")
    assert mod_logs.AppLogger.determine_color_enabled() is True


def test_safe_log_writes_to_real_stderr(capfd: pytest.CaptureFixture[str]) -> None:
    # --- execute ---
    mod_utils_logs.safe_log("emergency")

    # --- verify ---
    assert "emergency" in capfd.readouterr().err
