# src/launchrc/types.py

from __future__ import annotations

from typing import TypedDict

from typing_extensions import NotRequired


class RcFileReport(TypedDict):
    index: int
    filename: str


class StartupReport(TypedDict, total=False):
    batch: bool
    output_base: str | None
    host_jvm_args: list[str]
    sources: dict[str, str]


class ResolvedInvocation(TypedDict):
    command: str
    startup_args: int
    rc_files: list[RcFileReport]
    command_arguments: list[str]
    startup: NotRequired[StartupReport]
