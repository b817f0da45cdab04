"""
Shared pytest fixtures.

`fake_cargo` replaces the cargo subprocess with an in-process stand-in that
answers `read-manifest` from a table and writes the file `cargo rustc` would
produce, so orchestration can be tested without a Rust toolchain.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

import pytest

from erlangapp import toolchain
from erlangapp.config import Settings
from erlangapp.targets import Platform

# crate directory name -> `targets` entries of its manifest
TESTAPP_MANIFESTS: dict[str, list[dict[str, Any]]] = {
    "helloexe": [{"name": "helloexe", "kind": ["bin"], "src_path": "src/main.rs"}],
    "bonjourdylib": [{"name": "bonjourdylib", "kind": ["cdylib"], "src_path": "src/lib.rs"}],
    "holalib": [{"name": "holalib", "kind": ["lib"], "src_path": "src/lib.rs"}],
}


class FakeCargo:
    def __init__(self, platform: Platform = Platform.POSIX) -> None:
        self.platform = platform
        self.manifests: dict[str, Any] = {k: {"targets": v} for k, v in TESTAPP_MANIFESTS.items()}
        self.calls: list[tuple[list[str], Path]] = []
        self.failing: set[str] = set()
        self.missing_outputs: set[str] = set()
        self.unavailable = False

    def commands(self, subcommand: str) -> list[tuple[list[str], Path]]:
        return [(cmd, cwd) for cmd, cwd in self.calls if cmd[1] == subcommand]

    def _output_name(self, kind: str, name: str) -> str:
        if self.platform is Platform.WINDOWS:
            return f"{name}.exe" if kind == "bin" else f"{name}.dll"
        if kind == "bin":
            return name
        return f"lib{name}.dylib" if self.platform is Platform.APPLE else f"lib{name}.so"

    def _write_output(self, args: list[str], crate_dir: Path) -> None:
        if args[0] == "--bin":
            kind, name = "bin", args[1]
        else:
            manifest = self.manifests[crate_dir.name]
            libs = [t for t in manifest["targets"] if "cdylib" in t["kind"] or "dylib" in t["kind"]]
            kind, name = "lib", libs[0]["name"]
        if name in self.missing_outputs:
            return

        out = crate_dir / "target"
        triples = [a.split("=", 1)[1] for a in args if a.startswith("--target=")]
        if triples:
            out = out / triples[0]
        out = out / ("release" if "--release" in args else "debug")
        out.mkdir(parents=True, exist_ok=True)
        (out / self._output_name(kind, name)).write_bytes(b"\x7fELF fake " + name.encode())

    def __call__(self, cmd: list[str], cwd: str | None = None, **kwargs: Any) -> subprocess.CompletedProcess:
        if self.unavailable:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        crate_dir = Path(cwd) if cwd else Path.cwd()
        self.calls.append((list(cmd), crate_dir))
        subcommand, args = cmd[1], list(cmd[2:])

        if subcommand == "read-manifest":
            manifest = self.manifests.get(crate_dir.name, {"targets": []})
            stdout = manifest if isinstance(manifest, str) else json.dumps(manifest)
            return subprocess.CompletedProcess(cmd, 0, stdout=stdout.encode(), stderr=b"")

        if subcommand in self.failing:
            return subprocess.CompletedProcess(cmd, 101)

        if subcommand == "rustc":
            self._write_output(args, crate_dir)
        return subprocess.CompletedProcess(cmd, 0)


def make_crate(project: Path, name: str) -> Path:
    crate = project / "crates" / name
    (crate / "src").mkdir(parents=True)
    (crate / "Cargo.toml").write_text(f'[package]\nname = "{name}"\nversion = "0.1.0"\n')
    return crate


@pytest.fixture
def fake_cargo(monkeypatch: pytest.MonkeyPatch) -> FakeCargo:
    fake = FakeCargo()
    monkeypatch.setattr(toolchain.subprocess, "run", fake)
    return fake


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An app with the three test crates, a non-crate directory and a stray file."""
    app = tmp_path / "testapp"
    for name in TESTAPP_MANIFESTS:
        make_crate(app, name)
    (app / "crates" / "notes").mkdir()
    (app / "crates" / "notes" / "README.md").write_text("not a crate\n")
    (app / "crates" / "Cargo.toml").write_text("# stray file, not a crate directory\n")
    return app


@pytest.fixture
def posix_settings() -> Settings:
    return Settings(platform=Platform.POSIX)
