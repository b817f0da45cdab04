"""
options.py

Responsibility: look up flags in a flat argument list without consuming them.

The arguments are forwarded to cargo untouched, so this module only reads.
"""

from __future__ import annotations

from typing import Sequence


def has_flag(args: Sequence[str], flag: str) -> bool:
    return any(arg == flag for arg in args)


def find_option_value(args: Sequence[str], key: str) -> str | None:
    """
    Search args for "key=value", "key= value", "key =value" or "key = value".

    Returns the first value found. An occurrence of `key` that fits none of the
    forms (e.g. "key value") is skipped and the scan continues after it; running
    out of arguments mid-pattern means "not found".
    """
    it = iter(args)
    for arg0 in it:
        if arg0 != key and not arg0.startswith(key + "="):
            continue

        _, eq, value = arg0.partition("=")
        if eq:
            if value:
                return value  # key=value
            return next(it, None)  # key= value

        arg1 = next(it, None)
        if arg1 is None:
            return None
        if arg1 == "=":
            return next(it, None)  # key = value
        if arg1.startswith("="):
            return arg1[1:]  # key =value
        # arg1 is consumed; keep scanning after it.
    return None
