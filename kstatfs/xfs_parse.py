"""Parser for the XFS runtime statistics format of /proc/fs/xfs/stat."""

from __future__ import annotations

import re
from dataclasses import fields
from typing import IO, Iterable, Union

from kstatfs.xfs_types import (
    AttributeOperationStats,
    BlockMappingStats,
    BtreeAllocBlocks2Stats,
    BtreeAllocContig2Stats,
    BtreeBlockMap2Stats,
    BtreeInode2Stats,
    BTreeStats,
    BufferStats,
    DebugStats,
    DirectoryOperationStats,
    ExtendedPrecisionStats,
    ExtentAllocationStats,
    InodeClusteringStats,
    InodeOperationStats,
    LogOperationStats,
    PushAilStats,
    QuotaManagerStats,
    ReadWriteStats,
    Stats,
    TransactionStats,
    VnodeStats,
    XstratStats,
)

_UNSIGNED = re.compile(r"[0-9]+")
_UINT32_MAX = (1 << 32) - 1
_UINT64_MAX = (1 << 64) - 1

_EXTENDED_PRECISION = "xpc"

# label -> (attribute of Stats, record type, description for error messages)
_SECTIONS = {
    "extent_alloc": ("extent_allocation", ExtentAllocationStats, "XFS extent allocation stats"),
    "abt": ("allocation_btree", BTreeStats, "XFS btree stats"),
    "blk_map": ("block_mapping", BlockMappingStats, "XFS block mapping stats"),
    "bmbt": ("block_map_btree", BTreeStats, "XFS btree stats"),
    "dir": ("directory_operation", DirectoryOperationStats, "XFS directory operation stats"),
    "trans": ("transaction", TransactionStats, "XFS transaction stats"),
    "ig": ("inode_operation", InodeOperationStats, "XFS inode operation stats"),
    "log": ("log_operation", LogOperationStats, "XFS log operation stats"),
    "rw": ("read_write", ReadWriteStats, "XFS read write stats"),
    "attr": ("attribute_operation", AttributeOperationStats, "XFS attribute operation stats"),
    "icluster": ("inode_clustering", InodeClusteringStats, "XFS inode clustering stats"),
    "vnodes": ("vnode", VnodeStats, "XFS vnode stats"),
    "buf": ("buffer", BufferStats, "XFS buffer stats"),
    "push_ail": ("push_ail", PushAilStats, "XFS push ail stats"),
    "xstrat": ("xstrat", XstratStats, "XFS xstrat stats"),
    "abtb2": ("btree_alloc_blocks2", BtreeAllocBlocks2Stats, "abtb2 stats"),
    "abtc2": ("btree_alloc_contig2", BtreeAllocContig2Stats, "abtc2 stats"),
    "bmbt2": ("btree_block_map2", BtreeBlockMap2Stats, "bmbt2 stats"),
    "ibt2": ("btree_inode2", BtreeInode2Stats, "ibt2 stats"),
    "qm": ("quota_manager", QuotaManagerStats, "XFS quota stats"),
    "debug": ("debug", DebugStats, "XFS debug stats"),
}


def _parse_unsigned(values: list[str], limit: int) -> list[int]:
    result = []
    for value in values:
        if not _UNSIGNED.fullmatch(value) or int(value) > limit:
            raise ValueError(f"invalid unsigned integer: {value!r}")
        result.append(int(value))
    return result


def _build(record_type: type, values: list[int], description: str) -> object:
    expected = len(fields(record_type))
    allowed = {expected}
    # Older kernels do not report the "free" vnode counter.
    if record_type is VnodeStats:
        allowed.add(expected - 1)
    if len(values) not in allowed:
        raise ValueError(f"incorrect number of values for {description}: {len(values)}")
    return record_type(*values)


def parse_stats(stream: Union[IO[str], IO[bytes], Iterable[Union[str, bytes]]]) -> Stats:
    """Parse XFS statistics from a stream of lines in the /proc/fs/xfs/stat format.

    Short lines and unknown labels are ignored; malformed values or a wrong
    number of values for a known label raise ValueError.
    """
    stats = Stats()
    for line in stream:
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        parts = line.split()
        if len(parts) < 2:
            continue
        label, raw = parts[0], parts[1:]

        if label == _EXTENDED_PRECISION:
            stats.extended_precision = _build(
                ExtendedPrecisionStats,
                _parse_unsigned(raw, _UINT64_MAX),
                "XFS extended precision stats",
            )
            continue

        values = _parse_unsigned(raw, _UINT32_MAX)
        section = _SECTIONS.get(label)
        if section is None:
            continue
        attribute, record_type, description = section
        setattr(stats, attribute, _build(record_type, values, description))
    return stats