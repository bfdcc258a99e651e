import pytest

from kstatfs.fs import ProcFS
from kstatfs.zoneinfo import Zoneinfo, parse_zoneinfo, read_zoneinfo

FIXTURE = """Node 0, zone      DMA
  per-node stats
      nr_inactive_anon 230981
      nr_active_anon 547580
      nr_inactive_file 316904
      nr_active_file 346282
      nr_unevictable 115467
      nr_isolated_anon 0
      nr_isolated_file 0
      nr_anon_pages 795576
      nr_mapped    215483
      nr_file_pages 761874
      nr_dirty     908
      nr_writeback 0
      nr_shmem     224925
      nr_anon_transparent_hugepages 0
      nr_slab_reclaimable 131220
      nr_slab_unreclaimable 47320
      nr_dirtied   8007423
      nr_written   7752121
  pages free     3952
        min      33
        low      41
        high     49
        spanned  4095
        present  3975
        managed  3956
        protection: (0, 2877, 7826, 7826, 7826)
      nr_free_pages 3952
      nr_kernel_stack 0
      numa_hit     1
      numa_miss    0
      numa_foreign 0
      numa_interleave 0
      numa_local   1
      numa_other   0
  pagesets
  node_unreclaimable:  0
  start_pfn:           1
Node 0, zone    DMA32
  pages free     204252
        min      19510
        low      21059
        high     22608
        spanned  1044480
        present  759231
        managed  742806
        protection: (0, 0, 4949, 4949, 4949)
      nr_free_pages 204252
      nr_kernel_stack 2208
      numa_hit     113952967
      numa_miss    0
      numa_foreign 0
      numa_interleave 0
      numa_local   113952967
      numa_other   0
  pagesets
  start_pfn:           4096
"""

EXPECTED = [
    Zoneinfo(
        node="0", zone="", nr_free_pages=3952, min=33, low=41, high=49, spanned=4095,
        present=3975, managed=3956, nr_active_anon=547580, nr_inactive_anon=230981,
        nr_isolated_anon=0, nr_anon_pages=795576, nr_anon_transparent_hugepages=0,
        nr_active_file=346282, nr_inactive_file=316904, nr_isolated_file=0,
        nr_file_pages=761874, nr_slab_reclaimable=131220, nr_slab_unreclaimable=47320,
        nr_kernel_stack=0, nr_mapped=215483, nr_dirty=908, nr_writeback=0,
        nr_unevictable=115467, nr_shmem=224925, nr_dirtied=8007423, nr_written=7752121,
        numa_hit=1, numa_miss=0, numa_foreign=0, numa_interleave=0, numa_local=1,
        numa_other=0, protection=[0, 2877, 7826, 7826, 7826],
    ),
    Zoneinfo(
        node="0", zone="DMA32", nr_free_pages=204252, min=19510, low=21059, high=22608,
        spanned=1044480, present=759231, managed=742806, nr_kernel_stack=2208,
        numa_hit=113952967, numa_miss=0, numa_foreign=0, numa_interleave=0,
        numa_local=113952967, numa_other=0, protection=[0, 0, 4949, 4949, 4949],
    ),
]


@pytest.fixture
def proc(tmp_path):
    root = tmp_path / "proc"
    root.mkdir()
    (root / "zoneinfo").write_text(FIXTURE)
    return ProcFS(str(root))


def test_read_zoneinfo_matches_reference(proc):
    assert read_zoneinfo(proc) == EXPECTED


def test_parse_accepts_bytes():
    assert parse_zoneinfo(FIXTURE.encode()) == EXPECTED


def test_unparseable_counter_becomes_none():
    result = parse_zoneinfo("Node 1, zone Normal\n  nr_dirty abc\n  numa_hit 7\n")
    assert result[0].node == "1"
    assert result[0].zone == "Normal"
    assert result[0].nr_dirty is None
    assert result[0].numa_hit == 7


def test_bad_protection_is_ignored():
    result = parse_zoneinfo("Node 0, zone DMA\n  protection: (0, x, 3)\n")
    assert result[0].protection is None


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_zoneinfo(ProcFS(str(tmp_path)))