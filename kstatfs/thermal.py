"""Thermal zones from /sys/class/thermal/thermal_zone*."""

from __future__ import annotations

import glob
import os
from dataclasses import dataclass

from kstatfs.fs import SysFS, parse_bool, read_sys_file, read_uint_from_file


@dataclass
class ClassThermalZoneStats:
    """State of one thermal zone; mode and passive are None when not exposed."""

    name: str = ""
    type: str = ""
    temp: int = 0
    policy: str = ""
    mode: bool | None = None
    passive: int | None = None


def _parse_thermal_zone(path: str, name: str) -> ClassThermalZoneStats:
    zone_type = read_sys_file(os.path.join(path, "type"))
    policy = read_sys_file(os.path.join(path, "policy"))
    temp = read_uint_from_file(os.path.join(path, "temp"))

    try:
        mode = read_sys_file(os.path.join(path, "mode"))
    except (FileNotFoundError, PermissionError):
        mode = ""

    try:
        passive: int | None = read_uint_from_file(os.path.join(path, "passive"))
    except (FileNotFoundError, PermissionError):
        passive = None

    return ClassThermalZoneStats(
        name=name,
        type=zone_type,
        temp=temp,
        policy=policy,
        mode=parse_bool(mode),
        passive=passive,
    )


def class_thermal_zone_stats(fs: SysFS) -> list[ClassThermalZoneStats]:
    """Return the stats of every thermal zone, ordered by directory name."""
    pattern = os.path.join(glob.escape(fs.path("class", "thermal")), "thermal_zone[0-9]*")
    return [
        _parse_thermal_zone(path, os.path.basename(path).removeprefix("thermal_zone"))
        for path in sorted(glob.glob(pattern))
    ]