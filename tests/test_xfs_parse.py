import io

import pytest

from kstatfs.xfs_parse import parse_stats
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

FIFTEEN = "1 2 3 4 5 6 7 8 9 10 11 12 13 14 15"
FIFTEEN_VALUES = list(range(1, 16))


def parse(text):
    return parse_stats(io.StringIO(text))


def test_empty_input_gives_empty_stats():
    assert parse("") == Stats()


def test_short_lines_and_unknown_labels_ignored():
    assert parse("one\n\ntwo 1 2 3\n") == Stats()


@pytest.mark.parametrize(
    "text",
    [
        "extent_alloc XXX",
        "xpc XXX",
        "extent_alloc 1",
        "abt 1",
        "blk_map 1",
        "bmbt 1",
        "dir 1",
        "trans 1",
        "ig 1",
        "log 1",
        "rw 1",
        "attr 1",
        "icluster 1",
        "vnodes 1",
        "buf 1",
        "xpc 1",
        "xstrat 1",
        "push_ail 1 2 3 4 5",
        "debug 1 2",
        "qm 1 2 3 4 5 6 7",
        "abtb2 1 2 3 4 5 6",
        "abtc2 1 2 3 4 5 6",
        "bmbt2 1 2 3 4 5 6",
        "ibt2 1 2 3 4 5 6",
    ],
)
def test_invalid_input_raises(text):
    with pytest.raises(ValueError):
        parse(text)


def test_uint32_overflow_raises():
    with pytest.raises(ValueError):
        parse("rw 4294967296 1")


def test_xpc_accepts_64_bit_values():
    stats = parse("xpc 4294967296 2 3")
    assert stats.extended_precision.flush_bytes == 4294967296


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "extent_alloc 1 2 3 4",
            Stats(extent_allocation=ExtentAllocationStats(1, 2, 3, 4)),
        ),
        ("abt 1 2 3 4", Stats(allocation_btree=BTreeStats(1, 2, 3, 4))),
        (
            "blk_map 1 2 3 4 5 6 7",
            Stats(block_mapping=BlockMappingStats(1, 2, 3, 4, 5, 6, 7)),
        ),
        ("bmbt 1 2 3 4", Stats(block_map_btree=BTreeStats(1, 2, 3, 4))),
        (
            "dir 1 2 3 4",
            Stats(directory_operation=DirectoryOperationStats(1, 2, 3, 4)),
        ),
        ("trans 1 2 3", Stats(transaction=TransactionStats(1, 2, 3))),
        (
            "ig 1 2 3 4 5 6 7",
            Stats(inode_operation=InodeOperationStats(1, 2, 3, 4, 5, 6, 7)),
        ),
        ("log 1 2 3 4 5", Stats(log_operation=LogOperationStats(1, 2, 3, 4, 5))),
        ("rw 1 2", Stats(read_write=ReadWriteStats(1, 2))),
        (
            "attr 1 2 3 4",
            Stats(attribute_operation=AttributeOperationStats(1, 2, 3, 4)),
        ),
        ("icluster 1 2 3", Stats(inode_clustering=InodeClusteringStats(1, 2, 3))),
        (
            "vnodes 1 2 3 4 5 6 7",
            Stats(vnode=VnodeStats(1, 2, 3, 4, 5, 6, 7)),
        ),
        (
            "vnodes 1 2 3 4 5 6 7 8",
            Stats(vnode=VnodeStats(1, 2, 3, 4, 5, 6, 7, 8)),
        ),
        (
            "buf 1 2 3 4 5 6 7 8 9",
            Stats(buffer=BufferStats(1, 2, 3, 4, 5, 6, 7, 8, 9)),
        ),
        ("xpc 1 2 3", Stats(extended_precision=ExtendedPrecisionStats(1, 2, 3))),
        ("xstrat 1 2", Stats(xstrat=XstratStats(1, 2))),
        (
            "push_ail 1 2 3 4 5 6 7 8 9 10",
            Stats(push_ail=PushAilStats(1, 2, 3, 4, 5, 6, 7, 8, 9, 10)),
        ),
        ("debug 1", Stats(debug=DebugStats(1))),
        (
            "qm 1 2 3 4 5 6 7 8",
            Stats(quota_manager=QuotaManagerStats(1, 2, 3, 4, 5, 6, 7, 8)),
        ),
        (
            "abtb2 " + FIFTEEN,
            Stats(btree_alloc_blocks2=BtreeAllocBlocks2Stats(*FIFTEEN_VALUES)),
        ),
        (
            "abtc2 " + FIFTEEN,
            Stats(btree_alloc_contig2=BtreeAllocContig2Stats(*FIFTEEN_VALUES)),
        ),
        (
            "bmbt2 " + FIFTEEN,
            Stats(btree_block_map2=BtreeBlockMap2Stats(*FIFTEEN_VALUES)),
        ),
        (
            "ibt2 " + FIFTEEN,
            Stats(btree_inode2=BtreeInode2Stats(*FIFTEEN_VALUES)),
        ),
    ],
)
def test_valid_sections(text, expected):
    assert parse(text) == expected


def test_named_fields_of_vnode_with_free():
    vnode = parse("vnodes 1 2 3 4 5 6 7 8").vnode
    assert (vnode.active, vnode.remove, vnode.free) == (1, 7, 8)


def test_vnode_without_free_leaves_zero():
    assert parse("vnodes 1 2 3 4 5 6 7").vnode.free == 0


def test_bytes_stream_accepted():
    stats = parse_stats(io.BytesIO(b"rw 10 20\nxstrat 3 4\n"))
    assert stats.read_write == ReadWriteStats(read=10, write=20)
    assert stats.xstrat == XstratStats(quick=3, split=4)


def test_multiple_lines_combine():
    stats = parse("trans 706 944304 0\nattr 4 0 0 0\nunknown 5\n")
    assert stats.transaction == TransactionStats(sync=706, async_=944304, empty=0)
    assert stats.attribute_operation == AttributeOperationStats(get=4)
    assert stats.name == ""