"""
targets.py

Responsibility: what a crate target is called before and after it is copied.

cargo names its outputs after the host platform's conventions. The Erlang VM
loads NIF libraries by a `.so` name on every Unix, including macOS where cargo
emits `.dylib`, so the copy step may rename the library. The whole naming table
lives in `_FILENAMES`; the platform is always passed in, never detected here,
except by `host_platform()` for callers that have no configured platform.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum


class TargetKind(Enum):
    EXECUTABLE = "bin"
    SHARED_LIBRARY = "dylib"


class Platform(Enum):
    POSIX = "posix"
    APPLE = "macos"
    WINDOWS = "windows"


@dataclass(frozen=True)
class BuildTarget:
    """A single bin or dylib target declared by a crate manifest."""

    kind: TargetKind
    name: str

    @classmethod
    def executable(cls, name: str) -> BuildTarget:
        return cls(TargetKind.EXECUTABLE, name)

    @classmethod
    def shared_library(cls, name: str) -> BuildTarget:
        return cls(TargetKind.SHARED_LIBRARY, name)

    @property
    def is_executable(self) -> bool:
        return self.kind is TargetKind.EXECUTABLE


# (platform, kind) -> (destination pattern, cargo output pattern)
_FILENAMES: dict[tuple[Platform, TargetKind], tuple[str, str]] = {
    (Platform.POSIX, TargetKind.EXECUTABLE): ("{name}", "{name}"),
    (Platform.POSIX, TargetKind.SHARED_LIBRARY): ("lib{name}.so", "lib{name}.so"),
    (Platform.APPLE, TargetKind.EXECUTABLE): ("{name}", "{name}"),
    (Platform.APPLE, TargetKind.SHARED_LIBRARY): ("lib{name}.so", "lib{name}.dylib"),
    (Platform.WINDOWS, TargetKind.EXECUTABLE): ("{name}.exe", "{name}.exe"),
    (Platform.WINDOWS, TargetKind.SHARED_LIBRARY): ("{name}.dll", "{name}.dll"),
}

# Without these the macOS linker rejects the unresolved enif_* symbols that the
# VM provides at load time.
_APPLE_DYLIB_LINKER_ARGS: tuple[str, ...] = (
    "--",
    "--codegen",
    "link-args=-flat_namespace -undefined suppress",
)


def host_platform() -> Platform:
    if sys.platform == "darwin":
        return Platform.APPLE
    if sys.platform in ("win32", "cygwin"):
        return Platform.WINDOWS
    return Platform.POSIX


def parse_platform(value: str) -> Platform:
    """
    Accept a Platform value ("posix", "macos", "windows") or member name
    ("POSIX", "APPLE", "WINDOWS"), case-insensitively.
    """
    needle = value.strip().lower()
    for platform in Platform:
        if needle in (platform.value, platform.name.lower()):
            return platform
    choices = ", ".join(p.value for p in Platform)
    raise ValueError(f"Unknown platform {value!r} (expected one of: {choices})")


def artifact_filenames(target: BuildTarget, platform: Platform) -> tuple[str, str]:
    """
    Return (destination filename, cargo output filename) for target on platform.
    """
    dst, src = _FILENAMES[(platform, target.kind)]
    return dst.format(name=target.name), src.format(name=target.name)


def linker_args(target: BuildTarget, platform: Platform) -> tuple[str, ...]:
    if platform is Platform.APPLE and target.kind is TargetKind.SHARED_LIBRARY:
        return _APPLE_DYLIB_LINKER_ARGS
    return ()
