"""
erlangapp package

This package implements cargo-erlangapp: build, test and clean every Rust crate
nested under an Erlang application's `crates/` directory, and collect the built
executables and NIF libraries under `priv/crates/<crate>/`.

Key responsibilities are split across modules:
- `options.py`: find flag values in a flat argument list
- `invocation.py`: parse argv into a command, profile, target triple and cargo args
- `discovery.py`: find crate directories under `crates/`
- `manifest.py`: query a crate's manifest for its bin/dylib targets
- `targets.py`: per-platform artifact filenames and linker args
- `toolchain.py`: the only place that spawns cargo
- `orchestrator.py`: build/test/clean across all crates
- `config.py`: optional `erlangapp.yaml` plus environment overrides
- `cli.py`: CLI entrypoint (usage, logging, exit status)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
