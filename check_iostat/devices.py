"""Resolve device names and mount paths into the set of devices to sample."""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from check_iostat.core.context import Context
    from check_iostat.options import Configuration


MOUNT_TABLE = "/proc/mounts"

# /proc/mounts escapes space, tab, newline and backslash as \ooo
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


class UnmountedPathError(Exception):
    """A -p path has no entry in the mount table."""

    def __init__(self, path: str):
        super().__init__(f"'{path}' is not a mounted path")
        self.path = path


@dataclass(frozen=True)
class ResolvedDevice:
    """A device to sample and where it came from."""

    name: str
    source: str = "explicit"
    path: str | None = None


def _unescape(field: str) -> str:
    return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), field)


def parse_mount_table(content: str) -> list[tuple[str, str]]:
    """Parse mount table content into (device, mountpoint) pairs."""
    entries = []
    for line in content.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        entries.append((_unescape(parts[0]), _unescape(parts[1])))
    return entries


def device_key(name: str) -> str:
    """Name iostat reports a device under: '/dev/sdb1' and 'sdb1' are the same."""
    return name.removeprefix("/dev/")


def normalize_path(path: str) -> str:
    """Drop trailing slashes so '/var/' matches the '/var' mountpoint."""
    return path.rstrip("/") or "/"


def find_mount_device(path: str, entries: list[tuple[str, str]]) -> str | None:
    """
    Find the device mounted at exactly ``path``.

    When several entries share a mountpoint the last one wins, since that
    is the mount currently visible there.
    """
    target = normalize_path(path)
    device = None
    for source, mountpoint in entries:
        if mountpoint == target:
            device = source
    return device


def resolve_devices(
    config: "Configuration",
    context: "Context",
    mount_table: str = MOUNT_TABLE,
) -> list[ResolvedDevice]:
    """
    Build the ordered device set for a run.

    Args:
        config: Validated configuration
        context: Execution context
        mount_table: Mount table file to consult for -p paths

    Returns:
        Explicit devices followed by path-derived devices, duplicates
        merged with the first occurrence kept

    Raises:
        UnmountedPathError: A path has no mount table entry
    """
    resolved = [ResolvedDevice(name) for name in config.devices]

    if config.paths:
        try:
            content = context.read_file(mount_table)
        except OSError:
            # An unreadable table leaves every path unmounted
            content = ""
        entries = parse_mount_table(content)
        for path in config.paths:
            device = find_mount_device(path, entries)
            if device is None:
                raise UnmountedPathError(path)
            resolved.append(ResolvedDevice(device, source="mount", path=path))

    unique: dict[str, ResolvedDevice] = {}
    for device in resolved:
        unique.setdefault(device_key(device.name), device)
    return list(unique.values())
