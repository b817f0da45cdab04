"""
discovery.py

Responsibility: list the crates of a project.

A crate is any immediate subdirectory of `<project>/crates` holding a
`Cargo.toml` file. Entries that cannot be inspected are skipped; a missing or
unreadable `crates` directory is an error.
"""

from __future__ import annotations

from pathlib import Path

from erlangapp.config import Settings
from erlangapp.errors import CannotEnumerate


def is_crate(path: Path, manifest_filename: str) -> bool:
    try:
        return (path / manifest_filename).is_file()
    except OSError:
        return False


def enumerate_crate_dirs(project_dir: Path, settings: Settings) -> list[Path]:
    """
    Return crate directories under project_dir, sorted by path.
    """
    crates_root = Path(project_dir) / settings.crates_dir
    try:
        entries = list(crates_root.iterdir())
    except OSError as e:
        raise CannotEnumerate(f"Cannot read '{settings.crates_dir}' directory", e) from e

    return sorted(p for p in entries if is_crate(p, settings.manifest_filename))
