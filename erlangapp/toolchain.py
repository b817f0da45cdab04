"""
toolchain.py

Responsibility: the only place that spawns cargo.

Commands run synchronously with the crate directory as working directory.
There is no timeout and no retry; a failing cargo command is reported as-is.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from erlangapp.config import Settings
from erlangapp.errors import ToolchainCommandFailed, ToolchainUnavailable

logger = logging.getLogger(__name__)


def cargo_command(
    subcommand: str,
    args: Sequence[str],
    *,
    cwd: Path,
    failure: type[ToolchainCommandFailed],
    settings: Settings,
) -> None:
    """
    Run `<toolchain> <subcommand> <args...>` in cwd with the caller's stdio.

    Raises ToolchainUnavailable if cargo cannot be started, `failure` if it exits
    non-zero.
    """
    cmd = [settings.toolchain, subcommand, *args]
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        proc = subprocess.run(cmd, cwd=str(cwd))
    except OSError as e:
        raise ToolchainUnavailable(f"cannot start {settings.toolchain}", e) from e
    if proc.returncode != 0:
        raise failure(f"{settings.toolchain} {subcommand} failed in {cwd} (exit code {proc.returncode})")


def cargo_output(args: Sequence[str], *, cwd: Path, settings: Settings) -> subprocess.CompletedProcess:
    """
    Run `<toolchain> <args...>` in cwd and capture stdout/stderr as bytes.

    The exit code is not checked; callers judge the output.
    """
    cmd = [settings.toolchain, *args]
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        return subprocess.run(cmd, cwd=str(cwd), stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    except OSError as e:
        raise ToolchainUnavailable(f"cannot start {settings.toolchain}", e) from e
