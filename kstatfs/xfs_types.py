"""Records of XFS runtime statistics as found in /proc/fs/xfs/stat.

Most counters are 32-bit values; the extended precision byte counters
are 64-bit values.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ExtentAllocationStats:
    """XFS extent allocations."""

    extents_allocated: int = 0
    blocks_allocated: int = 0
    extents_freed: int = 0
    blocks_freed: int = 0


@dataclass
class BTreeStats:
    """Operations on an XFS internal B-tree."""

    lookups: int = 0
    compares: int = 0
    records_inserted: int = 0
    records_deleted: int = 0


@dataclass
class BlockMappingStats:
    """XFS block map operations."""

    reads: int = 0
    writes: int = 0
    unmaps: int = 0
    extent_list_insertions: int = 0
    extent_list_deletions: int = 0
    extent_list_lookups: int = 0
    extent_list_compares: int = 0


@dataclass
class DirectoryOperationStats:
    """XFS directory entry operations."""

    lookups: int = 0
    creates: int = 0
    removes: int = 0
    getdents: int = 0


@dataclass
class TransactionStats:
    """XFS metadata transactions."""

    sync: int = 0
    async_: int = 0
    empty: int = 0


@dataclass
class InodeOperationStats:
    """XFS inode operations."""

    attempts: int = 0
    found: int = 0
    recycle: int = 0
    missed: int = 0
    duplicate: int = 0
    reclaims: int = 0
    attribute_change: int = 0


@dataclass
class LogOperationStats:
    """XFS log buffer operations."""

    writes: int = 0
    blocks: int = 0
    no_internal_buffers: int = 0
    force: int = 0
    force_sleep: int = 0


@dataclass
class ReadWriteStats:
    """Number of read and write system calls on XFS filesystems."""

    read: int = 0
    write: int = 0


@dataclass
class AttributeOperationStats:
    """Operations on XFS extended file attributes."""

    get: int = 0
    set: int = 0
    remove: int = 0
    list: int = 0


@dataclass
class InodeClusteringStats:
    """XFS inode clustering operations."""

    iflush: int = 0
    flush: int = 0
    flush_inode: int = 0


@dataclass
class VnodeStats:
    """XFS vnode operations; free is 0 on kernels that do not report it."""

    active: int = 0
    allocate: int = 0
    get: int = 0
    hold: int = 0
    release: int = 0
    reclaim: int = 0
    remove: int = 0
    free: int = 0


@dataclass
class BufferStats:
    """XFS read/write I/O buffer operations."""

    get: int = 0
    create: int = 0
    get_locked: int = 0
    get_locked_waited: int = 0
    busy_locked: int = 0
    miss_locked: int = 0
    page_retries: int = 0
    page_found: int = 0
    get_read: int = 0


@dataclass
class ExtendedPrecisionStats:
    """Total bytes flushed, written and read by XFS."""

    flush_bytes: int = 0
    write_bytes: int = 0
    read_bytes: int = 0


@dataclass
class PushAilStats:
    """XFS tail-pushing operations."""

    try_logspace: int = 0
    sleep_logspace: int = 0
    pushes: int = 0
    success: int = 0
    push_buf: int = 0
    pinned: int = 0
    locked: int = 0
    flushing: int = 0
    restarts: int = 0
    flush: int = 0


@dataclass
class QuotaManagerStats:
    """XFS quota processing."""

    reclaims: int = 0
    reclaim_misses: int = 0
    dquote_dups: int = 0
    cache_misses: int = 0
    cache_hits: int = 0
    wants: int = 0
    shake_reclaims: int = 0
    inact_reclaims: int = 0


@dataclass
class XstratStats:
    """Bytes processed by the XFS daemon."""

    quick: int = 0
    split: int = 0


@dataclass
class DebugStats:
    """Whether XFS debugging is enabled."""

    enabled: int = 0


@dataclass
class _BtreeV2Stats:
    lookup: int = 0
    compare: int = 0
    insrec: int = 0
    delrec: int = 0
    new_root: int = 0
    kill_root: int = 0
    increment: int = 0
    decrement: int = 0
    lshift: int = 0
    rshift: int = 0
    split: int = 0
    join: int = 0
    alloc: int = 0
    free: int = 0
    moves: int = 0


@dataclass
class BtreeAllocBlocks2Stats(_BtreeV2Stats):
    """B-tree v2 free-space-by-block operations (abtb2)."""


@dataclass
class BtreeAllocContig2Stats(_BtreeV2Stats):
    """B-tree v2 free-space-by-size operations (abtc2)."""


@dataclass
class BtreeBlockMap2Stats(_BtreeV2Stats):
    """B-tree v2 block map operations (bmbt2)."""


@dataclass
class BtreeInode2Stats(_BtreeV2Stats):
    """B-tree v2 inode allocation operations (ibt2)."""


@dataclass
class Stats:
    """XFS runtime statistics; an empty name means totals over all XFS filesystems."""

    name: str = ""
    extent_allocation: ExtentAllocationStats = field(default_factory=ExtentAllocationStats)
    allocation_btree: BTreeStats = field(default_factory=BTreeStats)
    block_mapping: BlockMappingStats = field(default_factory=BlockMappingStats)
    block_map_btree: BTreeStats = field(default_factory=BTreeStats)
    directory_operation: DirectoryOperationStats = field(
        default_factory=DirectoryOperationStats
    )
    transaction: TransactionStats = field(default_factory=TransactionStats)
    inode_operation: InodeOperationStats = field(default_factory=InodeOperationStats)
    log_operation: LogOperationStats = field(default_factory=LogOperationStats)
    read_write: ReadWriteStats = field(default_factory=ReadWriteStats)
    attribute_operation: AttributeOperationStats = field(
        default_factory=AttributeOperationStats
    )
    inode_clustering: InodeClusteringStats = field(default_factory=InodeClusteringStats)
    vnode: VnodeStats = field(default_factory=VnodeStats)
    buffer: BufferStats = field(default_factory=BufferStats)
    extended_precision: ExtendedPrecisionStats = field(default_factory=ExtendedPrecisionStats)
    xstrat: XstratStats = field(default_factory=XstratStats)
    push_ail: PushAilStats = field(default_factory=PushAilStats)
    debug: DebugStats = field(default_factory=DebugStats)
    quota_manager: QuotaManagerStats = field(default_factory=QuotaManagerStats)
    btree_alloc_blocks2: BtreeAllocBlocks2Stats = field(default_factory=BtreeAllocBlocks2Stats)
    btree_alloc_contig2: BtreeAllocContig2Stats = field(default_factory=BtreeAllocContig2Stats)
    btree_block_map2: BtreeBlockMap2Stats = field(default_factory=BtreeBlockMap2Stats)
    btree_inode2: BtreeInode2Stats = field(default_factory=BtreeInode2Stats)