"""
Block device inventory schema.

Strongly typed model of `lsblk --json` output. Field names follow Python
vocabulary; aliases keep the lsblk wire names ("maj:min", "rm", "ro", "type",
"size") so documents parse and serialize in the same shape lsblk produces.
Models are frozen: a parsed tree is never modified.
"""

from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple

from pydantic import (
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)

from .normalize import normalize_mountpoints, parse_size


ROOT_MOUNTPOINT = "/"


class DeviceKind(str, Enum):
    """lsblk TYPE column. Unknown labels map to UNRECOGNIZED instead of failing."""

    DISK = "disk"
    PARTITION = "part"
    LOOP = "loop"
    RAID1 = "raid1"
    RAID5 = "raid5"
    RAID6 = "raid6"
    RAID0 = "raid0"
    RAID10 = "raid10"
    LVM = "lvm"
    CRYPT = "crypt"
    ROM = "rom"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def _missing_(cls, value: Any) -> "DeviceKind":
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return cls.UNRECOGNIZED


def classify_device_type(label: Any) -> DeviceKind:
    """Return the DeviceKind for an lsblk TYPE label. Never raises."""
    return DeviceKind(label)


# --- Device tree ---


class BlockDevice(BaseModel):
    """One lsblk record and its nested children."""

    name: str = Field(min_length=1)
    maj_min: str = Field(alias="maj:min")
    removable: bool = Field(alias="rm")
    size_bytes: int = Field(alias="size")
    read_only: bool = Field(alias="ro")
    device_type: str = Field(alias="type")  # raw label; see kind
    # None slots are "no mount" and are kept; () means the field was not reported
    mountpoints: Tuple[Optional[str], ...] = ()
    # None = not reported, () = reported empty
    children: Optional[Tuple["BlockDevice", ...]] = None

    # Extra lsblk columns (fstype, uuid, model, ...) are kept as-is
    model_config = {"frozen": True, "extra": "allow"}

    @model_validator(mode="before")
    @classmethod
    def _merge_mountpoint_fields(cls, data: Any) -> Any:
        # Older lsblk: "mountpoint" (single). Newer: "mountpoints" (list). Plural wins.
        if isinstance(data, dict) and "mountpoint" in data:
            data = dict(data)
            singular = data.pop("mountpoint")
            data.setdefault("mountpoints", singular)
        return data

    @field_validator("size_bytes", mode="before")
    @classmethod
    def _normalize_size(cls, value: Any) -> int:
        return parse_size(value)

    @field_validator("mountpoints", mode="before")
    @classmethod
    def _normalize_mountpoints(cls, value: Any) -> List[Optional[str]]:
        return normalize_mountpoints(value)

    @model_serializer(mode="wrap")
    def _omit_absent_children(self, handler: SerializerFunctionWrapHandler) -> dict:
        data = handler(self)
        if self.children is None:
            data.pop("children", None)
        return data

    @property
    def kind(self) -> DeviceKind:
        return classify_device_type(self.device_type)

    def active_mountpoints(self) -> List[str]:
        """Mountpoints that are actually set, in reported order."""
        return [mp for mp in self.mountpoints if mp is not None]

    def is_mounted(self) -> bool:
        return bool(self.active_mountpoints())

    def is_system(self) -> bool:
        """True if this device or any descendant is mounted at /."""
        if ROOT_MOUNTPOINT in self.active_mountpoints():
            return True
        return any(child.is_system() for child in self.iter_children())

    def has_children(self) -> bool:
        return bool(self.children)

    def iter_children(self) -> Iterator["BlockDevice"]:
        """Direct children only. Each call returns a fresh iterator."""
        return iter(self.children or ())

    def find_child(self, name: str) -> Optional["BlockDevice"]:
        """First direct child named `name` (not recursive)."""
        for child in self.iter_children():
            if child.name == name:
                return child
        return None

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, "BlockDevice"]]:
        """Depth-first pre-order over this device and its descendants as (depth, device)."""
        yield depth, self
        for child in self.iter_children():
            yield from child.walk(depth + 1)


# --- Root document ---


class BlockDevices(BaseModel):
    """
    Top-level lsblk document: {"blockdevices": [...]}.
    Iterating, indexing and len() work over the top-level devices in reported order.
    """

    devices: Tuple[BlockDevice, ...] = Field(alias="blockdevices")

    model_config = {"frozen": True, "extra": "allow"}

    def __iter__(self) -> Iterator[BlockDevice]:  # type: ignore[override]
        return iter(self.devices)

    def __len__(self) -> int:
        return len(self.devices)

    def __getitem__(self, index: int) -> BlockDevice:
        return self.devices[index]

    def system(self) -> List[BlockDevice]:
        """Top-level devices whose subtree mounts /."""
        return [d for d in self.devices if d.is_system()]

    def non_system(self) -> List[BlockDevice]:
        """Top-level devices with no / mount on them or any descendant."""
        return [d for d in self.devices if not d.is_system()]

    def find_by_name(self, name: str) -> Optional[BlockDevice]:
        """First top-level device named `name` (not recursive)."""
        for device in self.devices:
            if device.name == name:
                return device
        return None

    def walk(self) -> Iterator[Tuple[int, BlockDevice]]:
        """Depth-first over every device in the forest as (depth, device)."""
        for device in self.devices:
            yield from device.walk()
