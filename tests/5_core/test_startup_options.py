# tests/5_core/test_startup_options.py
"""Tests for StartupOptions.process_arg() and validate_startup_options()."""

import pytest

import launchrc.startup_options as mod_startup
from launchrc.errors import StartupOptionError, StartupValidationError


# ---------------------------------------------------------------------------
# process_arg()
# ---------------------------------------------------------------------------


def test_unary_packed_value_does_not_consume_next() -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute ---
    consumed = opts.process_arg("--output_base=/tmp/out", "build", "")

    # --- verify ---
    assert consumed is False
    assert opts.output_base == "/tmp/out"
    assert opts.option_sources["output_base"] == mod_startup.COMMAND_LINE_SOURCE


def test_unary_space_separated_consumes_next() -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute ---
    consumed = opts.process_arg("--output_base", "/tmp/out", "/home/u/.bazelrc")

    # --- verify ---
    assert consumed is True
    assert opts.output_base == "/tmp/out"
    assert opts.option_sources["output_base"] == "/home/u/.bazelrc"


def test_unary_without_value_fails() -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute and verify ---
    with pytest.raises(StartupOptionError, match="requires a value"):
        opts.process_arg("--output_base", None, "")


def test_multi_valued_flag_accumulates() -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute ---
    opts.process_arg("--host_jvm_args=-Xmx1g", "", "a.rc")
    opts.process_arg("--host_jvm_args", "-Xss4m", "")

    # --- verify ---
    assert opts.host_jvm_args == ["-Xmx1g", "-Xss4m"]


@pytest.mark.parametrize(
    ("arg", "attr", "expected"),
    [
        ("--batch", "batch", True),
        ("--nobatch", "batch", False),
        ("--noblock_for_lock", "block_for_lock", False),
        ("--watchfs", "watchfs", True),
        ("--batch_cpu_scheduling", "batch_cpu_scheduling", True),
        ("--nomaster_bazelrc", "master_bazelrc", False),
    ],
)
def test_nullary_flags(arg: str, attr: str, expected: bool) -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute ---
    consumed = opts.process_arg(arg, "--next", "")

    # --- verify ---
    assert consumed is False
    assert getattr(opts, attr) is expected


def test_later_value_wins() -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute ---
    opts.process_arg("--batch", "", "rc")
    opts.process_arg("--nobatch", "", "")

    # --- verify ---
    assert opts.batch is False
    assert opts.option_sources["batch"] == mod_startup.COMMAND_LINE_SOURCE


def test_unknown_flag_names_rcfile() -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute ---
    with pytest.raises(StartupOptionError) as excinfo:
        opts.process_arg("--bogus", "", "/ws/.bazelrc")

    # --- verify ---
    assert excinfo.value.option == "--bogus"
    assert excinfo.value.rcfile == "/ws/.bazelrc"
    assert "'--bogus'" in str(excinfo.value)
    assert "/ws/.bazelrc" in str(excinfo.value)


def test_nullary_with_value_fails() -> None:
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute and verify ---
    with pytest.raises(StartupOptionError, match="does not take a value"):
        opts.process_arg("--batch=yes", "", "")


def test_shared_prefix_is_not_a_match() -> None:
    """--batchy must not be read as --batch."""
    # --- setup ---
    opts = mod_startup.StartupOptions()

    # --- execute and verify ---
    with pytest.raises(StartupOptionError, match="Unknown startup option"):
        opts.process_arg("--batchy", "", "")


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("arg", "next_arg", "expected"),
    [
        ("--bazelrc=/a", "/b", "/a"),
        ("--bazelrc", "/b", "/b"),
        ("--bazelrc", None, None),
        ("--bazelrc=", "/b", ""),
        ("--bazelrcx", "/b", None),
        ("--other", "/b", None),
    ],
)
def test_get_unary_option(arg: str, next_arg: str | None, expected: str | None) -> None:
    # --- execute and verify ---
    assert mod_startup.get_unary_option(arg, next_arg, "--bazelrc") == expected


@pytest.mark.parametrize(
    ("arg", "expected"),
    [("--help", False), ("-h", False), ("-help", False), ("--batch", True), ("build", False)],
)
def test_is_arg(arg: str, expected: bool) -> None:
    # --- execute and verify ---
    assert mod_startup.is_arg(arg) is expected


# ---------------------------------------------------------------------------
# validate_startup_options()
# ---------------------------------------------------------------------------


def test_validate_accepts_normal_invocation() -> None:
    # --- execute and verify (no raise) ---
    mod_startup.StartupOptions().validate_startup_options(
        ["bazel", "--bazelrc", "/x.rc", "--output_base", "/o", "build", "//..."]
    )


def test_validate_rejects_empty_args() -> None:
    # --- execute and verify ---
    with pytest.raises(StartupValidationError):
        mod_startup.StartupOptions().validate_startup_options([])


def test_validate_rejects_rc_flag_without_value() -> None:
    # --- execute and verify ---
    with pytest.raises(StartupValidationError, match="requires a value"):
        mod_startup.StartupOptions().validate_startup_options(["bazel", "--bazelrc"])


@pytest.mark.parametrize(
    "late_flag", ["--bazelrc=/x.rc", "--blazerc", "--nomaster_bazelrc"]
)
def test_validate_rejects_rc_flags_after_command(late_flag: str) -> None:
    # --- execute and verify ---
    with pytest.raises(StartupValidationError, match="before the command"):
        mod_startup.StartupOptions().validate_startup_options(
            ["bazel", "build", late_flag, "//..."]
        )
