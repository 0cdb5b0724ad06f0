"""Data-volume helpers.

:func:`format_data_volume` is a pure function: the number of fraction
digits is an explicit argument instead of shared formatter state.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

_UNITS: tuple[str, ...] = ("KiB", "MiB", "GiB", "TiB")


def format_data_volume(n_bytes: int, fraction_digits: int = 1) -> str:
    """Render *n_bytes* with binary prefixes.

    Values below 1024 are shown as ``"<n> Byte"``.  Larger values are
    scaled in steps of 1024 up to TiB and printed with at most
    *fraction_digits* digits after the decimal point; trailing zeros
    are dropped (``1536`` → ``"1.5 KiB"``, ``2048`` → ``"2 KiB"``).
    """
    if fraction_digits < 0:
        raise ValueError("fraction_digits must not be negative")

    if n_bytes < 1024:
        return f"{n_bytes} Byte"

    value = float(n_bytes)
    unit = _UNITS[0]
    for unit in _UNITS:
        value /= 1024
        if value < 1024 or unit == _UNITS[-1]:
            break

    text = f"{value:.{fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {unit}"


def tree_size(path: Path) -> int:
    """Sum the sizes of all regular files below *path*.

    Symlinks are neither followed nor counted.
    """
    st = os.lstat(path)
    if not stat.S_ISDIR(st.st_mode):
        return st.st_size if stat.S_ISREG(st.st_mode) else 0

    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            entry = os.lstat(os.path.join(dirpath, name))
            if stat.S_ISREG(entry.st_mode):
                total += entry.st_size
    return total
