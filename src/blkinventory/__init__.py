"""
blkinventory: parse `lsblk --json` output into a normalized, typed device tree.
"""

from .errors import (
    AcquisitionError,
    BlockInventoryError,
    NormalizationError,
    StructureError,
    UpstreamError,
)
from .inventory import get_devices
from .normalize import normalize_mountpoints, parse_size
from .parser import dump_lsblk, load_lsblk, parse_lsblk, save_lsblk
from .schema import BlockDevice, BlockDevices, DeviceKind, classify_device_type

__version__ = "0.1.0"

__all__ = [
    "AcquisitionError",
    "BlockDevice",
    "BlockDevices",
    "BlockInventoryError",
    "DeviceKind",
    "NormalizationError",
    "StructureError",
    "UpstreamError",
    "classify_device_type",
    "dump_lsblk",
    "get_devices",
    "load_lsblk",
    "normalize_mountpoints",
    "parse_lsblk",
    "parse_size",
    "save_lsblk",
]
