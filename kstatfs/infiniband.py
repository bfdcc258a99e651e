"""InfiniBand devices, ports and port counters from /sys/class/infiniband."""

from __future__ import annotations

import errno
import math
import os
import re
import struct
from dataclasses import dataclass, field, fields

from kstatfs.fs import SysFS, parse_uint, read_sys_file

_CLASS_PATH = ("class", "infiniband")
_UINT32 = re.compile(r"[0-9]+")
_UINT32_MAX = (1 << 32) - 1
_UINT64_MASK = (1 << 64) - 1
_BYTES_PER_GBIT = 125_000_000
# Data counters are reported per lane and divided by the lane count.
_LANES = 4
_NOT_AVAILABLE = "N/A (no PMA)"
_SKIPPED_ERRNOS = frozenset({errno.EOPNOTSUPP, errno.ENOTSUP, errno.EINVAL})
_LEGACY_PREFIX = "legacy_"


@dataclass
class InfiniBandCounters:
    """Counters of one port; None where the counter file is absent or not available."""

    legacy_port_multicast_rcv_packets: int | None = None
    legacy_port_multicast_xmit_packets: int | None = None
    legacy_port_rcv_data_64: int | None = None
    legacy_port_rcv_packets_64: int | None = None
    legacy_port_unicast_rcv_packets: int | None = None
    legacy_port_unicast_xmit_packets: int | None = None
    legacy_port_xmit_data_64: int | None = None
    legacy_port_xmit_packets_64: int | None = None

    link_downed: int | None = None
    link_error_recovery: int | None = None
    multicast_rcv_packets: int | None = None
    multicast_xmit_packets: int | None = None
    port_rcv_constraint_errors: int | None = None
    port_rcv_data: int | None = None
    port_rcv_discards: int | None = None
    port_rcv_errors: int | None = None
    port_rcv_packets: int | None = None
    port_xmit_constraint_errors: int | None = None
    port_xmit_data: int | None = None
    port_xmit_discards: int | None = None
    port_xmit_packets: int | None = None
    port_xmit_wait: int | None = None
    unicast_rcv_packets: int | None = None
    unicast_xmit_packets: int | None = None


@dataclass
class InfiniBandPort:
    """One port of an InfiniBand device; rate is in bytes per second."""

    name: str = ""
    port: int = 0
    state: str = ""
    state_id: int = 0
    phys_state: str = ""
    phys_state_id: int = 0
    rate: int = 0
    counters: InfiniBandCounters = field(default_factory=InfiniBandCounters)


@dataclass
class InfiniBandDevice:
    """One InfiniBand device with its ports keyed by port number."""

    name: str = ""
    board_id: str = ""
    firmware_version: str = ""
    hca_type: str = ""
    ports: dict[int, InfiniBandPort] = field(default_factory=dict)


_COUNTER_NAMES = frozenset(
    f.name for f in fields(InfiniBandCounters) if not f.name.startswith(_LEGACY_PREFIX)
)
_LEGACY_NAMES = frozenset(
    f.name.removeprefix(_LEGACY_PREFIX)
    for f in fields(InfiniBandCounters)
    if f.name.startswith(_LEGACY_PREFIX)
)
_SCALED_COUNTERS = frozenset({"port_rcv_data", "port_xmit_data"})
_SCALED_LEGACY = frozenset({"port_rcv_data_64", "port_xmit_data_64"})


def _wrap(err: OSError, message: str) -> OSError:
    detail = err.strerror or str(err)
    if err.errno is None:
        return OSError(f"{message}: {detail}")
    return OSError(err.errno, f"{message}: {detail}")


def _parse_uint32(text: str) -> int:
    if not _UINT32.fullmatch(text) or int(text) > _UINT32_MAX:
        raise ValueError(f"failed to convert {text} into uint")
    return int(text)


def parse_state(s: str) -> tuple[int, str]:
    """Parse a state of the form "<id>: <name>" into (id, name)."""
    parts = s.split(":")
    if len(parts) != 2:
        raise ValueError(f"failed to split {s} into 'ID: NAME'")
    name = parts[1].strip()
    return _parse_uint32(parts[0].strip()), name


def parse_rate(s: str) -> int:
    """Parse a rate such as "100 Gb/sec (4X EDR)" into bytes per second."""
    parts = s.split("Gb/sec")
    if len(parts) != 2:
        raise ValueError(f"failed to split {s!r} by 'Gb/sec'")
    text = parts[0].strip()
    try:
        value = struct.unpack("f", struct.pack("f", float(text)))[0]
    except (ValueError, OverflowError) as err:
        raise ValueError(f"failed to convert {text} into uint") from err
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"failed to convert {text} into uint")
    return int(value * _BYTES_PER_GBIT)


def _read_raw(path: str) -> str:
    with open(path, encoding="utf-8", errors="replace") as handle:
        return handle.read()


def _read_counters(
    directory: str,
    known: frozenset[str],
    scaled: frozenset[str],
    prefix: str,
    values: dict[str, int],
    missing_ok: bool,
) -> None:
    try:
        with os.scandir(directory) as listing:
            entries = sorted(listing, key=lambda entry: entry.name)
    except FileNotFoundError:
        if missing_ok:
            return
        raise

    for entry in entries:
        if not entry.is_file(follow_symlinks=False):
            continue
        try:
            value = read_sys_file(entry.path)
        except OSError as err:
            if isinstance(err, FileNotFoundError) or err.errno in _SKIPPED_ERRNOS:
                continue
            raise _wrap(err, f"failed to read file {entry.path!r}") from err

        if entry.name not in known:
            continue
        try:
            number = parse_uint(value)
        except ValueError:
            if _NOT_AVAILABLE in value:
                continue
            raise
        if entry.name in scaled:
            number = (number * _LANES) & _UINT64_MASK
        values[prefix + entry.name] = number


def _parse_counters(port_path: str) -> InfiniBandCounters:
    values: dict[str, int] = {}
    _read_counters(
        os.path.join(port_path, "counters"),
        _COUNTER_NAMES,
        _SCALED_COUNTERS,
        "",
        values,
        missing_ok=False,
    )
    _read_counters(
        os.path.join(port_path, "counters_ext"),
        _LEGACY_NAMES,
        _SCALED_LEGACY,
        _LEGACY_PREFIX,
        values,
        missing_ok=True,
    )
    return InfiniBandCounters(**values)


def _parse_port(fs: SysFS, name: str, port: str) -> InfiniBandPort:
    port_number = _parse_uint32(port)
    port_path = fs.path(*_CLASS_PATH, name, "ports", port)

    try:
        state_id, state = parse_state(_read_raw(os.path.join(port_path, "state")))
    except ValueError as err:
        raise ValueError(f"could not parse state file in {port_path}: {err}") from err

    try:
        phys_state_id, phys_state = parse_state(
            _read_raw(os.path.join(port_path, "phys_state"))
        )
    except ValueError as err:
        raise ValueError(f"could not parse phys_state file in {port_path}: {err}") from err

    try:
        rate = parse_rate(_read_raw(os.path.join(port_path, "rate")))
    except ValueError as err:
        raise ValueError(f"could not parse rate file in {port_path}: {err}") from err

    return InfiniBandPort(
        name=name,
        port=port_number,
        state=state,
        state_id=state_id,
        phys_state=phys_state,
        phys_state_id=phys_state_id,
        rate=rate,
        counters=_parse_counters(port_path),
    )


def _parse_device(fs: SysFS, name: str) -> InfiniBandDevice:
    path = fs.path(*_CLASS_PATH, name)
    attributes = {}
    for attribute, filename in (
        ("board_id", "board_id"),
        ("firmware_version", "fw_ver"),
        ("hca_type", "hca_type"),
    ):
        file_path = os.path.join(path, filename)
        try:
            attributes[attribute] = read_sys_file(file_path)
        except OSError as err:
            raise _wrap(err, f"failed to read file {file_path!r}") from err

    ports_path = os.path.join(path, "ports")
    try:
        port_names = sorted(os.listdir(ports_path))
    except OSError as err:
        raise _wrap(err, f"failed to list InfiniBand ports at {ports_path!r}") from err

    ports = {}
    for port_name in port_names:
        port = _parse_port(fs, name, port_name)
        ports[port.port] = port
    return InfiniBandDevice(name=name, ports=ports, **attributes)


def infiniband_class(fs: SysFS) -> dict[str, InfiniBandDevice]:
    """Return every InfiniBand device below class/infiniband, keyed by device name."""
    path = fs.path(*_CLASS_PATH)
    try:
        names = sorted(os.listdir(path))
    except OSError as err:
        raise _wrap(err, f"failed to list InfiniBand devices at {path!r}") from err
    return {name: _parse_device(fs, name) for name in names}