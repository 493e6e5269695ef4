"""
Field normalizers for lsblk output.

lsblk reports some fields in more than one shape depending on its version and
flags: size is a byte count with --bytes and a string like "894.3G" without it;
mountpoint is a single nullable string in older releases and mountpoints a list
in newer ones. These helpers turn each shape into one canonical value.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Union

from .errors import NormalizationError

# Largest value lsblk can report (u64).
MAX_SIZE_BYTES = 2**64 - 1

# Unit suffix (upper-cased) -> byte multiplier. lsblk prints binary units.
SIZE_UNITS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "KIB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "MIB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "GIB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
    "TIB": 1024**4,
    "P": 1024**5,
    "PB": 1024**5,
    "PIB": 1024**5,
}

_SIZE_RE = re.compile(r"([0-9]*\.?[0-9]*)(.*)", re.DOTALL)


def _check_range(size: int, raw: Any) -> int:
    if size < 0:
        raise NormalizationError("negative size", raw)
    if size > MAX_SIZE_BYTES:
        raise NormalizationError("size out of range", raw)
    return size


def parse_size(value: Union[int, float, str]) -> int:
    """Return a size field as a byte count.

    Numbers are taken as bytes (floats truncate toward zero). Strings are a
    decimal number followed by an optional unit: "512", "8M", "3.5T", "1.2 GiB".
    Units are case-insensitive and binary (K = 1024).
    """
    # bool is an int subclass; "rm": true in the size slot is a shape error, not 1 byte
    if isinstance(value, bool):
        raise NormalizationError("invalid size", value)
    if isinstance(value, int):
        return _check_range(value, value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise NormalizationError("invalid size", value)
        if value < 0:
            raise NormalizationError("negative size", value)
        return _check_range(int(value), value)
    if not isinstance(value, str):
        raise NormalizationError("invalid size", value)

    text = value.strip()
    if not text:
        raise NormalizationError("empty size string", value)
    match = _SIZE_RE.match(text)
    number, suffix = match.group(1), match.group(2).strip()
    if number in ("", "."):
        raise NormalizationError("invalid size string", value)
    try:
        amount = Decimal(number)
    except InvalidOperation:
        raise NormalizationError("invalid size string", value) from None
    multiplier = SIZE_UNITS.get(suffix.upper())
    if multiplier is None:
        raise NormalizationError("invalid size string", value)
    return _check_range(int(round(amount * multiplier)), value)


def as_list(value: Any) -> List[Any]:
    """Wrap a scalar in a one-element list; pass lists through as a copy."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_mountpoints(value: Any) -> List[Optional[str]]:
    """Return a mountpoint/mountpoints field as a list of optional paths.

    null -> [None], "/boot" -> ["/boot"], [null, "/a"] -> [None, "/a"].
    A missing field never reaches here; the model defaults it to [].
    """
    mountpoints = as_list(value)
    for mp in mountpoints:
        if mp is not None and not isinstance(mp, str):
            raise NormalizationError("invalid mountpoint", value)
    return mountpoints



def format_size(size_bytes: int) -> str:
    """Human-readable size in lsblk's style: 1 decimal, binary units ("894.3G")."""
    value = float(size_bytes)
    unit = "B"
    for unit in ("B", "K", "M", "G", "T", "P"):
        if value < 1024 or unit == "P":
            break
        value /= 1024
    if unit == "B":
        return f"{size_bytes}B"
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{text}{unit}"
