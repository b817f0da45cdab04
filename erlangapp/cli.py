"""
cli.py

Responsibility: CLI entrypoint for cargo-erlangapp.

High-level flow:
1) Parse argv -> `Invocation` (or print usage)
2) Load `Settings` for the project directory (cwd by default)
3) Run build/test/clean across all crates
4) Report the first error once on stderr and turn it into the exit status

Nothing below this module exits the process; errors propagate up to `run`.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from erlangapp.config import Settings, load_settings
from erlangapp.errors import ErlangAppError
from erlangapp.invocation import parse_invocation
from erlangapp.orchestrator import run_command


USAGE = """\
Usage:
\tcargo-erlangapp build [cargo rustc args]
\tcargo-erlangapp clean [cargo clean args]
\tcargo-erlangapp test [cargo test args]
"""


def usage() -> None:
    sys.stderr.write(USAGE)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("erlangapp").setLevel(level)


def run(argv: Sequence[str], project_dir: str | Path, settings: Settings | None = None) -> int:
    """
    Run the command in argv against project_dir and return the exit status.

    argv[0] is the program name. Settings are loaded from project_dir unless
    given.
    """
    invocation = parse_invocation(argv)
    if invocation is None:
        usage()
        return 1

    project = Path(project_dir)
    try:
        if settings is None:
            settings = load_settings(project)
        _configure_logging(settings.log_level)
        run_command(invocation, project, settings)
    except ErlangAppError as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv if argv is None else argv)
    return run(args, os.getcwd())


if __name__ == "__main__":
    raise SystemExit(main())
