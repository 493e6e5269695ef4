"""
Acquire block device inventory by running lsblk and parsing its JSON output.

Only this module knows about the lsblk command line; parsing lives in
parser.py and never starts a process.
"""

import os
import sys
from typing import List, Optional

from .errors import UpstreamError
from .executor import DEFAULT_TIMEOUT, Executor, make_executor
from .parser import parse_lsblk
from .schema import BlockDevices

_DEBUG = bool(os.environ.get("BLKINVENTORY_DEBUG", ""))


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[blkinventory] inventory: {msg}", file=sys.stderr)


def lsblk_command(in_bytes: bool = False) -> List[str]:
    """Command line for lsblk. BLKINVENTORY_LSBLK overrides the binary."""
    cmd = [os.environ.get("BLKINVENTORY_LSBLK") or "lsblk", "--json"]
    if in_bytes:
        cmd.append("--bytes")
    return cmd


def get_devices(
    executor: Optional[Executor] = None,
    in_bytes: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
) -> BlockDevices:
    """Run lsblk --json and parse its output.

    Raises AcquisitionError if lsblk cannot run, UpstreamError if it exits
    non-zero, and StructureError/NormalizationError if its output does not parse.
    """
    if executor is None:
        executor = make_executor(timeout)
    cmd = lsblk_command(in_bytes=in_bytes)
    _debug(f"running {' '.join(cmd)}")
    r = executor(cmd, timeout=timeout)
    if r.returncode != 0:
        _debug(f"lsblk exited {r.returncode}")
        raise UpstreamError(cmd, r.returncode, r.stderr)
    return parse_lsblk(r.stdout)
