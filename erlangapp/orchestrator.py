"""
orchestrator.py

Responsibility: run build/test/clean across every crate of a project.

Crates and targets are processed one at a time, in order. The first failure
aborts the whole command; artifacts already copied stay in place.

Build, per (crate, target):
1) `cargo rustc --bin <name>` or `cargo rustc --lib`, plus the user's cargo args
   and any platform linker args
2) copy `<crate>/target[/<triple>]/<profile>/<cargo filename>` to
   `<project>/priv/crates/<crate name>/<destination filename>`
"""

from __future__ import annotations

import logging
import shutil
import stat
from pathlib import Path

from erlangapp.config import Settings
from erlangapp.discovery import enumerate_crate_dirs
from erlangapp.errors import (
    CannotCopyArtifact,
    CannotCreateOutputDir,
    CannotDeleteOutputDir,
    ToolchainBuildFailed,
    ToolchainCleanFailed,
    ToolchainTestFailed,
)
from erlangapp.invocation import Command, Invocation
from erlangapp.manifest import read_targets
from erlangapp.targets import BuildTarget, Platform, artifact_filenames, linker_args
from erlangapp.toolchain import cargo_command

logger = logging.getLogger(__name__)


def _rustc_args(target: BuildTarget, invocation: Invocation, platform: Platform) -> list[str]:
    if target.is_executable:
        args = ["--bin", target.name]
    else:
        # cargo allows one lib per crate, so it needs no name.
        args = ["--lib"]
    args.extend(invocation.cargo_args)
    args.extend(linker_args(target, platform))
    return args


def artifact_source_path(crate_dir: Path, invocation: Invocation, filename: str) -> Path:
    path = crate_dir / "target"
    if invocation.target:
        path = path / invocation.target
    return path / invocation.profile.output_dir_name / filename


def output_root(project_dir: Path, settings: Settings) -> Path:
    return Path(project_dir) / settings.output_dir


def _copy_artifact(src: Path, dst_dir: Path, dst_name: str) -> Path:
    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CannotCreateOutputDir(f"cannot create dest directories in {dst_dir}", e) from e

    dst = dst_dir / dst_name
    try:
        shutil.copy2(src, dst)
    except OSError as e:
        raise CannotCopyArtifact(f"cannot copy artifact {src}", e) from e
    return dst


def build_crates(invocation: Invocation, project_dir: Path, settings: Settings) -> list[Path]:
    """
    Build every bin/dylib target of every crate and copy it into the output tree.

    Returns the destination paths, in build order.
    """
    platform = settings.resolved_platform()
    out_root = output_root(project_dir, settings)
    copied: list[Path] = []

    for crate_dir in enumerate_crate_dirs(project_dir, settings):
        for target in read_targets(crate_dir, settings):
            logger.info("Building %s", crate_dir)
            cargo_command(
                "rustc",
                _rustc_args(target, invocation, platform),
                cwd=crate_dir,
                failure=ToolchainBuildFailed,
                settings=settings,
            )

            dst_name, src_name = artifact_filenames(target, platform)
            src = artifact_source_path(crate_dir, invocation, src_name)
            dst = _copy_artifact(src, out_root / crate_dir.name, dst_name)
            logger.debug("Copied %s -> %s", src, dst)
            copied.append(dst)

    return copied


def test_crates(invocation: Invocation, project_dir: Path, settings: Settings) -> None:
    for crate_dir in enumerate_crate_dirs(project_dir, settings):
        logger.info("Testing %s", crate_dir)
        cargo_command(
            "test",
            invocation.cargo_args,
            cwd=crate_dir,
            failure=ToolchainTestFailed,
            settings=settings,
        )


def remove_dir_all_force(path: Path) -> None:
    """
    Remove the directory tree at path. A missing path, or one that is not a
    directory, is left alone. A symlink to a directory is unlinked; its target
    is kept.
    """
    try:
        mode = path.stat().st_mode
    except FileNotFoundError:
        return
    if not stat.S_ISDIR(mode):
        return
    if path.is_symlink():
        path.unlink()
    else:
        shutil.rmtree(path)


def clean_crates(invocation: Invocation, project_dir: Path, settings: Settings) -> None:
    for crate_dir in enumerate_crate_dirs(project_dir, settings):
        logger.info("Cleaning %s", crate_dir)
        cargo_command(
            "clean",
            invocation.cargo_args,
            cwd=crate_dir,
            failure=ToolchainCleanFailed,
            settings=settings,
        )

    out_root = output_root(project_dir, settings)
    try:
        remove_dir_all_force(out_root)
    except OSError as e:
        raise CannotDeleteOutputDir(f"can't delete output dir {out_root}", e) from e


def run_command(invocation: Invocation, project_dir: Path, settings: Settings) -> None:
    if invocation.command is Command.BUILD:
        build_crates(invocation, project_dir, settings)
    elif invocation.command is Command.TEST:
        test_crates(invocation, project_dir, settings)
    else:
        clean_crates(invocation, project_dir, settings)
