"""
manifest.py

Responsibility: ask cargo which bin/dylib targets a crate declares.

`cargo read-manifest` prints the crate manifest as JSON; only its `targets`
array is used. Targets of any other kind (lib, rlib, test, bench, ...) are
dropped.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from erlangapp.config import Settings
from erlangapp.errors import ManifestUnparsable
from erlangapp.targets import BuildTarget
from erlangapp.toolchain import cargo_output

MANIFEST_QUERY: tuple[str, ...] = ("read-manifest",)

_SHARED_LIBRARY_KINDS = ("dylib", "cdylib")


def _target_from_json(obj: Any) -> BuildTarget | None:
    if not isinstance(obj, dict):
        return None
    name = obj.get("name")
    kinds = obj.get("kind")
    if not isinstance(name, str) or not name or not isinstance(kinds, list):
        return None
    kinds = [k for k in kinds if isinstance(k, str)]

    if "bin" in kinds:
        return BuildTarget.executable(name)
    if any(k in kinds for k in _SHARED_LIBRARY_KINDS):
        return BuildTarget.shared_library(name)
    return None


def parse_targets(text: str | bytes) -> list[BuildTarget]:
    """
    Parse manifest JSON into the bin/dylib targets it declares, in manifest order.

    Raises ManifestUnparsable if the text is not JSON or has no `targets` array.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ManifestUnparsable("Cannot parse crate manifest", e) from e

    targets = data.get("targets") if isinstance(data, dict) else None
    if not isinstance(targets, list):
        raise ManifestUnparsable("Cannot parse crate manifest (no `targets` array)")

    out: list[BuildTarget] = []
    for obj in targets:
        target = _target_from_json(obj)
        if target is not None:
            out.append(target)
    return out


def read_targets(crate_dir: Path, settings: Settings) -> list[BuildTarget]:
    proc = cargo_output(MANIFEST_QUERY, cwd=crate_dir, settings=settings)
    try:
        return parse_targets(proc.stdout)
    except ManifestUnparsable as e:
        stderr = (proc.stderr or b"").decode("utf-8", errors="replace").strip()
        if stderr:
            raise ManifestUnparsable(f"{e.message} for {crate_dir}: {stderr}", e.cause) from e
        raise
