"""
invocation.py

Responsibility: turn argv into an `Invocation`.

argv[1] is the command; everything after it is kept verbatim as cargo args.
`--release`/`--debug` and `--target` are only read from those args, never
removed, since cargo needs to see them too.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from erlangapp.options import find_option_value, has_flag


class Command(Enum):
    BUILD = "build"
    TEST = "test"
    CLEAN = "clean"


class BuildProfile(Enum):
    RELEASE = "release"
    DEBUG = "debug"
    DEFAULT_DEBUG = "default-debug"

    @property
    def output_dir_name(self) -> str:
        """Name of cargo's per-profile directory under `target/`."""
        return "release" if self is BuildProfile.RELEASE else "debug"


@dataclass(frozen=True)
class Invocation:
    command: Command
    target: str | None
    profile: BuildProfile
    cargo_args: tuple[str, ...]


def parse_command_name(arg: str) -> Command | None:
    for command in Command:
        if command.value == arg:
            return command
    return None


def parse_invocation(argv: Sequence[str]) -> Invocation | None:
    """
    Parse the full argv (argv[0] is the program name).

    Returns None when there is no command or it is not one of build/test/clean.
    """
    if len(argv) < 2:
        return None
    command = parse_command_name(argv[1])
    if command is None:
        return None

    rest = tuple(argv[2:])
    if has_flag(rest, "--release"):
        profile = BuildProfile.RELEASE
    elif has_flag(rest, "--debug"):
        profile = BuildProfile.DEBUG
    else:
        profile = BuildProfile.DEFAULT_DEBUG

    return Invocation(
        command=command,
        target=find_option_value(rest, "--target"),
        profile=profile,
        cargo_args=rest,
    )
