"""Clock sources from /sys/devices/system/clocksource."""

from __future__ import annotations

import glob
import os
from dataclasses import dataclass, field

from kstatfs.fs import SysFS, read_sys_file


@dataclass
class ClockSource:
    """One clock source device with the available and the current clock source."""

    name: str = ""
    available: list[str] = field(default_factory=list)
    current: str = ""


def _parse_clocksource(path: str, name: str) -> ClockSource:
    available = read_sys_file(os.path.join(path, "available_clocksource"))
    current = read_sys_file(os.path.join(path, "current_clocksource"))
    return ClockSource(name=name, available=available.split(), current=current)


def clock_sources(fs: SysFS) -> list[ClockSource]:
    """Return every clocksource device, ordered by directory name."""
    pattern = os.path.join(
        glob.escape(fs.path("devices", "system", "clocksource")), "clocksource[0-9]*"
    )
    return [
        _parse_clocksource(path, os.path.basename(path).removeprefix("clocksource"))
        for path in sorted(glob.glob(pattern))
    ]