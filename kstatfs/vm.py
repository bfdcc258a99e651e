"""Virtual memory settings from /proc/sys/vm."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, fields

from kstatfs.fs import ProcFS, parse_int, read_sys_file


@dataclass
class VM:
    """One value per file in /proc/sys/vm; None where the file was absent or unreadable."""

    admin_reserve_kbytes: int | None = None
    block_dump: int | None = None
    compact_unevictable_allowed: int | None = None
    dirty_background_bytes: int | None = None
    dirty_background_ratio: int | None = None
    dirty_bytes: int | None = None
    dirty_expire_centisecs: int | None = None
    dirty_ratio: int | None = None
    dirtytime_expire_seconds: int | None = None
    dirty_writeback_centisecs: int | None = None
    drop_caches: int | None = None
    extfrag_threshold: int | None = None
    hugetlb_shm_group: int | None = None
    laptop_mode: int | None = None
    legacy_va_layout: int | None = None
    lowmem_reserve_ratio: list[int | None] | None = None
    max_map_count: int | None = None
    memory_failure_early_kill: int | None = None
    memory_failure_recovery: int | None = None
    min_free_kbytes: int | None = None
    min_slab_ratio: int | None = None
    min_unmapped_ratio: int | None = None
    mmap_min_addr: int | None = None
    nr_hugepages: int | None = None
    nr_hugepages_mempolicy: int | None = None
    nr_overcommit_hugepages: int | None = None
    numa_stat: int | None = None
    numa_zonelist_order: str = ""
    oom_dump_tasks: int | None = None
    oom_kill_allocating_task: int | None = None
    overcommit_kbytes: int | None = None
    overcommit_memory: int | None = None
    overcommit_ratio: int | None = None
    page_cluster: int | None = None
    panic_on_oom: int | None = None
    percpu_pagelist_fraction: int | None = None
    stat_interval: int | None = None
    swappiness: int | None = None
    user_reserve_kbytes: int | None = None
    vfs_cache_pressure: int | None = None
    watermark_boost_factor: int | None = None
    watermark_scale_factor: int | None = None
    zone_reclaim_mode: int | None = None


_LIST_FILE = "lowmem_reserve_ratio"
_STRING_FILE = "numa_zonelist_order"
_RENAMED = {"page_cluster": "page-cluster"}
_INT_FILES = {
    _RENAMED.get(field.name, field.name): field.name
    for field in fields(VM)
    if field.name not in (_LIST_FILE, _STRING_FILE)
}


def _int_or_none(text: str) -> int | None:
    try:
        return parse_int(text)
    except ValueError:
        return None


def read_vm(fs: ProcFS) -> VM:
    """Read every readable setting in sys/vm below the proc mount point."""
    path = fs.path("sys", "vm")
    if not stat.S_ISDIR(os.stat(path).st_mode):
        raise NotADirectoryError(f"{path} is not a directory")

    with os.scandir(path) as listing:
        entries = sorted(listing, key=lambda entry: entry.name)

    values: dict[str, object] = {}
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            continue
        try:
            value = read_sys_file(entry.path)
        except OSError:
            # Some files in /proc/sys/vm are write only.
            continue

        if entry.name == _LIST_FILE:
            values[_LIST_FILE] = [_int_or_none(part) for part in value.split()]
        elif entry.name == _STRING_FILE:
            values[_STRING_FILE] = value
        elif entry.name in _INT_FILES:
            values[_INT_FILES[entry.name]] = parse_int(value)

    return VM(**values)