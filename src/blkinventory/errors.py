"""
Error types raised while acquiring and parsing lsblk output.

Callers catch BlockInventoryError to handle every failure of a parse attempt;
the subclasses tell them which stage failed.
"""

from typing import Any, List, Optional


class BlockInventoryError(Exception):
    """Base error for blkinventory."""


class AcquisitionError(BlockInventoryError):
    """The command could not produce output at all (not found, timed out, not UTF-8)."""

    def __init__(self, cmd: List[str], reason: str) -> None:
        super().__init__(f"{' '.join(cmd)}: {reason}")
        self.cmd = list(cmd)
        self.reason = reason


class UpstreamError(BlockInventoryError):
    """The command ran but exited non-zero. stderr is kept verbatim."""

    def __init__(self, cmd: List[str], returncode: int, stderr: str) -> None:
        super().__init__(f"{' '.join(cmd)} failed ({returncode}): {stderr.strip()}")
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr


class StructureError(BlockInventoryError):
    """Input is not JSON, or not shaped like an lsblk document."""

    def __init__(self, message: str, location: str = "") -> None:
        super().__init__(f"{location}: {message}" if location else message)
        self.location = location
        self.message = message


class NormalizationError(BlockInventoryError, ValueError):
    """A field value could not be normalized (e.g. a size with an unknown unit).

    Also a ValueError so validators can raise it and pydantic reports it as a
    value error.
    """

    def __init__(self, message: str, value: Any, location: Optional[str] = None) -> None:
        text = f"{message}: {value!r}"
        if location:
            text = f"{location}: {text}"
        super().__init__(text)
        self.message = message
        self.value = value
        self.location = location
