"""XFS runtime statistics from the proc and sys filesystems."""

from __future__ import annotations

import glob
import os

from kstatfs.fs import DEFAULT_PROC_MOUNT_POINT, DEFAULT_SYS_MOUNT_POINT, ProcFS, SysFS
from kstatfs.xfs_parse import parse_stats
from kstatfs.xfs_types import Stats


class XFS:
    """Handle on the XFS statistics exposed below a proc and a sys mount point.

    A blank mount point selects the usual default location.
    """

    def __init__(
        self,
        proc_mount_point: str = DEFAULT_PROC_MOUNT_POINT,
        sys_mount_point: str = DEFAULT_SYS_MOUNT_POINT,
    ) -> None:
        if not str(proc_mount_point).strip():
            proc_mount_point = DEFAULT_PROC_MOUNT_POINT
        self.proc = ProcFS(proc_mount_point)
        if not str(sys_mount_point).strip():
            sys_mount_point = DEFAULT_SYS_MOUNT_POINT
        self.sys = SysFS(sys_mount_point)

    def __repr__(self) -> str:
        return f"XFS({self.proc.mount_point!r}, {self.sys.mount_point!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XFS):
            return NotImplemented
        return (self.proc, self.sys) == (other.proc, other.sys)

    def __hash__(self) -> int:
        return hash((self.proc, self.sys))

    def proc_stat(self) -> Stats:
        """Read the aggregated statistics from fs/xfs/stat below the proc mount point."""
        with open(self.proc.path("fs", "xfs", "stat"), "rb") as handle:
            return parse_stats(handle)

    def sys_stats(self) -> list[Stats]:
        """Read per-filesystem statistics, ordered by filesystem name.

        Kernels older than 4.4 expose none, which gives an empty list.
        """
        pattern = os.path.join(glob.escape(self.sys.path("fs", "xfs")), "*", "stats", "stats")
        result = []
        for path in sorted(glob.glob(pattern)):
            with open(path, "rb") as handle:
                stats = parse_stats(handle)
            stats.name = os.path.basename(os.path.dirname(os.path.dirname(path)))
            result.append(stats)
        return result


def new_default_xfs() -> XFS:
    """Open the XFS statistics at the usual proc and sys mount points."""
    return XFS(DEFAULT_PROC_MOUNT_POINT, DEFAULT_SYS_MOUNT_POINT)