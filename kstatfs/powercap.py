"""RAPL power zones from /sys/class/powercap."""

from __future__ import annotations

import os
from dataclasses import dataclass

from kstatfs.fs import SysFS, read_uint_from_file

_DIGITS = "0123456789"


@dataclass
class RaplZone:
    """One RAPL power zone; index tells apart zones that share a name."""

    name: str = ""
    index: int = 0
    path: str = ""
    max_microjoules: int = 0

    def energy_microjoules(self) -> int:
        """Read the current value of the zone's energy counter."""
        return read_uint_from_file(os.path.join(self.path, "energy_uj"))


def _index_and_name(usages: dict[str, int], name: str) -> tuple[int, str]:
    """Split a trailing "-<digit>" index off name, or fall back to the usage count."""
    if len(name) >= 2 and name[-1] in _DIGITS and name[-2] == "-":
        return int(name[-1]), name[:-2]
    return usages.get(name, 0), name


def get_rapl_zones(fs: SysFS) -> list[RaplZone]:
    """Return every RAPL zone below class/powercap, ordered by directory name."""
    rapl_dir = fs.path("class", "powercap")
    try:
        entries = sorted(os.listdir(rapl_dir))
    except OSError as err:
        raise FileNotFoundError(
            "no sysfs powercap / RAPL power metrics files found"
        ) from err

    zones = []
    usages: dict[str, int] = {}
    for entry in entries:
        zone_path = os.path.join(rapl_dir, entry)
        try:
            with open(os.path.join(zone_path, "name"), encoding="utf-8", errors="replace") as handle:
                raw_name = handle.read().strip()
        except OSError:
            continue

        index, name = _index_and_name(usages, raw_name)
        max_microjoules = read_uint_from_file(os.path.join(zone_path, "max_energy_range_uj"))
        zones.append(
            RaplZone(name=name, index=index, path=zone_path, max_microjoules=max_microjoules)
        )
        usages[name] = index + 1
    return zones