"""Per-zone memory statistics from /proc/zoneinfo."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

from kstatfs.fs import ProcFS, parse_int

_NODE_ZONE = re.compile(r"(\d+), zone\s+(\w+)", re.ASCII)
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


@dataclass
class Zoneinfo:
    """One node/zone block of /proc/zoneinfo; counters absent from the block stay None."""

    node: str = ""
    zone: str = ""
    nr_free_pages: int | None = None
    min: int | None = None
    low: int | None = None
    high: int | None = None
    scanned: int | None = None
    spanned: int | None = None
    present: int | None = None
    managed: int | None = None
    nr_active_anon: int | None = None
    nr_inactive_anon: int | None = None
    nr_isolated_anon: int | None = None
    nr_anon_pages: int | None = None
    nr_anon_transparent_hugepages: int | None = None
    nr_active_file: int | None = None
    nr_inactive_file: int | None = None
    nr_isolated_file: int | None = None
    nr_file_pages: int | None = None
    nr_slab_reclaimable: int | None = None
    nr_slab_unreclaimable: int | None = None
    nr_mlock_stack: int | None = None
    nr_kernel_stack: int | None = None
    nr_mapped: int | None = None
    nr_dirty: int | None = None
    nr_writeback: int | None = None
    nr_unevictable: int | None = None
    nr_shmem: int | None = None
    nr_dirtied: int | None = None
    nr_written: int | None = None
    numa_hit: int | None = None
    numa_miss: int | None = None
    numa_foreign: int | None = None
    numa_interleave: int | None = None
    numa_local: int | None = None
    numa_other: int | None = None
    protection: list[int] | None = None


_COUNTERS = frozenset(
    field.name for field in fields(Zoneinfo) if field.name not in ("node", "zone", "protection")
)


def _int_or_none(text: str) -> int | None:
    try:
        return parse_int(text)
    except ValueError:
        return None


def _parse_protection(line: str) -> list[int] | None:
    values = line.split(":")[1].replace("(", "", 1).replace(")", "", 1).strip()
    result = []
    for item in values.split(", "):
        if not _DECIMAL.fullmatch(item):
            return None
        number = int(item)
        if not _INT64_MIN <= number <= _INT64_MAX:
            return None
        result.append(number)
    return result


def _parse_block(block: str) -> Zoneinfo:
    info = Zoneinfo()
    for line in block.split("\n"):
        match = _NODE_ZONE.search(line)
        if match:
            info.node, info.zone = match.group(1), match.group(2)
            continue
        stripped = line.strip()
        if stripped.startswith("per-node stats"):
            info.zone = ""
            continue
        parts = stripped.split()
        if len(parts) < 2:
            continue
        key = parts[0]
        if key in _COUNTERS:
            setattr(info, key, _int_or_none(parts[1]))
        elif key == "protection:":
            protection = _parse_protection(line)
            if protection is not None:
                info.protection = protection
    return info


def parse_zoneinfo(data: str | bytes) -> list[Zoneinfo]:
    """Parse the content of a zoneinfo file into one entry per node block."""
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    return [_parse_block(block) for block in text.split("\nNode")]


def read_zoneinfo(fs: ProcFS) -> list[Zoneinfo]:
    """Read and parse zoneinfo below the proc mount point."""
    with open(fs.path("zoneinfo"), "rb") as handle:
        return parse_zoneinfo(handle.read())