"""Access to the proc and sys pseudo-filesystems, plus small value parsers.

The sys filesystem exposes kernel data structures as a tree of small
files, most of which hold a single value.
"""

from __future__ import annotations

import os
import stat

DEFAULT_PROC_MOUNT_POINT = "/proc"
DEFAULT_SYS_MOUNT_POINT = "/sys"

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def _check_mount_point(mount_point: str) -> str:
    info = os.stat(mount_point)
    if not stat.S_ISDIR(info.st_mode):
        raise NotADirectoryError(f"mount point {mount_point} is not a directory")
    return mount_point


def _join(root: str, *parts: str) -> str:
    """Join path parts under root, treating every part as relative."""
    return os.path.normpath(os.sep.join([root, *(part for part in parts if part)]))


class _MountedFS:
    mount_point: str

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.mount_point!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.mount_point == other.mount_point

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.mount_point))


class ProcFS(_MountedFS):
    """The proc filesystem mounted at a given directory."""

    def __init__(self, mount_point: str = DEFAULT_PROC_MOUNT_POINT) -> None:
        self.mount_point = _check_mount_point(os.fspath(mount_point))

    def path(self, *args: str) -> str:
        """Return the path of the given components below the mount point."""
        return _join(self.mount_point, *args)


class SysFS(_MountedFS):
    """The sys filesystem mounted at a given directory."""

    def __init__(self, mount_point: str = DEFAULT_SYS_MOUNT_POINT) -> None:
        self.mount_point = _check_mount_point(os.fspath(mount_point))

    def path(self, *args: str) -> str:
        """Return the path of the given components below the mount point."""
        return _join(self.mount_point, *args)


def new_default_fs() -> SysFS:
    """Open the sys filesystem at its usual mount point."""
    return SysFS(DEFAULT_SYS_MOUNT_POINT)


def read_sys_file(path: str) -> str:
    """Read a small sysfs-style file and return its content without surrounding whitespace."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        return handle.read().strip()


def _parse_digits(text: str, base: int, original: str) -> int:
    if base == 0:
        prefix = text[:2].lower()
        if prefix in _PREFIXES and len(text) > 2:
            base, text = _PREFIXES[prefix], text[2:]
        elif len(text) > 1 and text[0] == "0":
            base, text = 8, text[1:]
        else:
            base = 10
    allowed = _DIGITS[:base]
    if not text or any(ch not in allowed for ch in text.lower()):
        raise ValueError(f"invalid integer: {original!r}")
    return int(text, base)


def _parse_unsigned(value: str, base: int) -> int:
    number = _parse_digits(value, base, value)
    if number > _UINT64_MAX:
        raise ValueError(f"value out of range: {value!r}")
    return number


def parse_int(value: str) -> int:
    """Parse a signed 64-bit integer, honouring 0x, 0o, 0b and leading-zero octal prefixes."""
    sign, body = 1, value
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    number = sign * _parse_digits(body, 0, value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value out of range: {value!r}")
    return number


def parse_uint(value: str) -> int:
    """Parse an unsigned 64-bit integer, honouring the same prefixes as parse_int."""
    return _parse_unsigned(value, 0)


def read_uint_from_file(path: str) -> int:
    """Read a file holding one decimal unsigned 64-bit integer."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        return _parse_unsigned(handle.read().strip(), 10)


def parse_bool(value: str) -> bool | None:
    """Map "enabled" to True and "disabled" to False; anything else gives None."""
    if value == "enabled":
        return True
    if value == "disabled":
        return False
    return None