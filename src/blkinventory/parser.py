"""
Parse entry point: lsblk JSON text -> BlockDevices, and back.

Parsing is all-or-nothing. Any pydantic ValidationError is turned into a
StructureError or NormalizationError naming the offending field.
"""

import os
import sys
from pathlib import Path
from typing import Any, Tuple, Union

from pydantic import ValidationError

from .errors import NormalizationError, StructureError
from .schema import BlockDevices

_DEBUG = bool(os.environ.get("BLKINVENTORY_DEBUG", ""))

# pydantic error types that are constraint violations on a well-shaped value
_CONSTRAINT_ERRORS = frozenset({
    "string_too_short",
    "greater_than_equal",
    "less_than_equal",
})


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[blkinventory] parser: {msg}", file=sys.stderr)


def _format_loc(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _translate(exc: ValidationError) -> Exception:
    """Pick the first error reported by pydantic and map it to our error types."""
    err = exc.errors()[0]
    location = _format_loc(err.get("loc", ()))
    cause = (err.get("ctx") or {}).get("error")
    if isinstance(cause, NormalizationError):
        return NormalizationError(cause.message, cause.value, location=location)
    if err.get("type") in _CONSTRAINT_ERRORS:
        return NormalizationError(err.get("msg", "invalid value"), err.get("input"), location=location)
    return StructureError(err.get("msg", "invalid document"), location=location)


def parse_lsblk(json_data: Union[str, bytes]) -> BlockDevices:
    """Parse `lsblk --json` output into BlockDevices.

    Raises StructureError for invalid JSON or a document of the wrong shape
    and NormalizationError for field values that cannot be normalized.
    """
    if isinstance(json_data, bytes):
        try:
            json_data = json_data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StructureError(f"input is not valid UTF-8 at byte {e.start}") from e
    try:
        devices = BlockDevices.model_validate_json(json_data)
    except ValidationError as e:
        _debug(f"{e.error_count()} validation error(s); first: {e.errors()[0]}")
        raise _translate(e) from e
    _debug(f"parsed {len(devices)} top-level device(s)")
    return devices


def dump_lsblk(devices: BlockDevices, indent: int = 2) -> str:
    """Serialize back to the lsblk document shape. Sizes are written in bytes."""
    return devices.model_dump_json(by_alias=True, indent=indent)


def load_lsblk(path: Path) -> BlockDevices:
    """Read and parse a saved lsblk JSON document."""
    return parse_lsblk(Path(path).read_bytes())


def save_lsblk(devices: BlockDevices, path: Path) -> None:
    Path(path).write_text(dump_lsblk(devices), encoding="utf-8")
