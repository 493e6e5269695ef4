"""
Entry point: python -m blkinventory / blkinventory.
Acquire (or load) lsblk output, filter, print, and optionally render reports.
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

from .cli import parse_args
from .errors import AcquisitionError, BlockInventoryError, UpstreamError
from .executor import Executor
from .inventory import get_devices
from .normalize import format_size
from .parser import dump_lsblk, load_lsblk, save_lsblk
from .schema import BlockDevices

SNAPSHOT_FILENAME = "lsblk-snapshot.json"

EXIT_OK = 0
EXIT_ACQUISITION = 1
EXIT_PARSE = 2


def _error(msg: str) -> None:
    print(f"[blkinventory] error: {msg}", file=sys.stderr)


def _acquire(args, executor: Optional[Executor] = None) -> BlockDevices:
    if args.from_file is not None:
        return load_lsblk(args.from_file)
    return get_devices(executor, in_bytes=args.in_bytes, timeout=args.timeout)


def _select(devices: BlockDevices, args) -> BlockDevices:
    """Narrow the top-level devices according to --system / --non-system."""
    if args.system:
        return BlockDevices.model_validate({"blockdevices": devices.system()})
    if args.non_system:
        return BlockDevices.model_validate({"blockdevices": devices.non_system()})
    return devices


def format_tree(devices: BlockDevices) -> str:
    """Plain-text tree, one device per line, children indented."""
    lines = []
    for depth, d in devices.walk():
        parts = [d.name, d.maj_min, format_size(d.size_bytes), d.device_type]
        mountpoints = d.active_mountpoints()
        if mountpoints:
            parts.append(",".join(mountpoints))
        lines.append("  " * depth + " ".join(parts))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None, executor: Optional[Executor] = None) -> int:
    args = parse_args(argv)
    try:
        devices = _acquire(args, executor)
    except (AcquisitionError, UpstreamError) as e:
        _error(str(e))
        return EXIT_ACQUISITION
    except OSError as e:
        if args.from_file is not None:
            _error(f"cannot read {args.from_file}: {e}")
        else:
            _error(f"cannot run lsblk: {e}")
        return EXIT_ACQUISITION
    except BlockInventoryError as e:
        _error(f"cannot parse lsblk output: {e}")
        return EXIT_PARSE

    selected = _select(devices, args)
    if args.as_json:
        print(dump_lsblk(selected))
    elif len(selected):
        print(format_tree(selected))

    if args.output_dir is not None:
        from .renderers import run_all as run_all_renderers
        output_dir = Path(args.output_dir)
        run_all_renderers(selected, output_dir)
        save_lsblk(selected, output_dir / SNAPSHOT_FILENAME)
        if os.environ.get("BLKINVENTORY_DEBUG"):
            print(f"[blkinventory] wrote reports to {output_dir}", file=sys.stderr)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
