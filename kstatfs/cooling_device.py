"""Cooling devices from /sys/class/thermal/cooling_device*."""

from __future__ import annotations

import glob
import os
import re
from dataclasses import dataclass

from kstatfs.fs import SysFS, read_sys_file

_DECIMAL = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


@dataclass
class ClassCoolingDeviceStats:
    """State of one cooling device."""

    name: str = ""
    type: str = ""
    max_state: int = 0
    cur_state: int = 0


def _parse_int64(text: str) -> int:
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return number


def _parse_cooling_device(path: str, name: str) -> ClassCoolingDeviceStats:
    device_type = read_sys_file(os.path.join(path, "type"))
    max_state = _parse_int64(read_sys_file(os.path.join(path, "max_state")))
    # cur_state can be -1, e.g. for intel_powerclamp.
    cur_state = _parse_int64(read_sys_file(os.path.join(path, "cur_state")))
    return ClassCoolingDeviceStats(
        name=name, type=device_type, max_state=max_state, cur_state=cur_state
    )


def class_cooling_device_stats(fs: SysFS) -> list[ClassCoolingDeviceStats]:
    """Return the stats of every cooling device, ordered by directory name."""
    pattern = os.path.join(glob.escape(fs.path("class", "thermal")), "cooling_device[0-9]*")
    return [
        _parse_cooling_device(path, os.path.basename(path).removeprefix("cooling_device"))
        for path in sorted(glob.glob(pattern))
    ]