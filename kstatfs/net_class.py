"""Network interfaces from /sys/class/net."""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass

from kstatfs.fs import SysFS, parse_int, read_sys_file

_CLASS_PATH = ("class", "net")
_SKIPPED_ERRNOS = frozenset({errno.EOPNOTSUPP, errno.ENOTSUP, errno.EINVAL})


@dataclass
class NetClassIface:
    """Attributes of one interface; numbers are None and strings empty when absent."""

    name: str = ""
    addr_assign_type: int | None = None
    addr_len: int | None = None
    address: str = ""
    broadcast: str = ""
    carrier: int | None = None
    carrier_changes: int | None = None
    carrier_up_count: int | None = None
    carrier_down_count: int | None = None
    dev_id: int | None = None
    dormant: int | None = None
    duplex: str = ""
    flags: int | None = None
    if_alias: str = ""
    if_index: int | None = None
    if_link: int | None = None
    link_mode: int | None = None
    mtu: int | None = None
    name_assign_type: int | None = None
    net_dev_group: int | None = None
    oper_state: str = ""
    phys_port_id: str = ""
    phys_port_name: str = ""
    phys_switch_id: str = ""
    speed: int | None = None
    tx_queue_len: int | None = None
    type: int | None = None


_STRING_FILES = {
    "address": "address",
    "broadcast": "broadcast",
    "duplex": "duplex",
    "ifalias": "if_alias",
    "operstate": "oper_state",
    "phys_port_id": "phys_port_id",
    "phys_port_name": "phys_port_name",
    "phys_switch_id": "phys_switch_id",
}
_INT_FILES = {
    "addr_assign_type": "addr_assign_type",
    "addr_len": "addr_len",
    "carrier": "carrier",
    "carrier_changes": "carrier_changes",
    "carrier_up_count": "carrier_up_count",
    "carrier_down_count": "carrier_down_count",
    "dev_id": "dev_id",
    "dormant": "dormant",
    "flags": "flags",
    "ifindex": "if_index",
    "iflink": "if_link",
    "link_mode": "link_mode",
    "mtu": "mtu",
    "name_assign_type": "name_assign_type",
    "netdev_group": "net_dev_group",
    "speed": "speed",
    "tx_queue_len": "tx_queue_len",
    "type": "type",
}


def _wrap(err: OSError, message: str) -> OSError:
    detail = err.strerror or str(err)
    if err.errno is None:
        return OSError(f"{message}: {detail}")
    return OSError(err.errno, f"{message}: {detail}")


def _int_or_none(text: str) -> int | None:
    try:
        return parse_int(text)
    except ValueError:
        return None


def _parse_iface(device_path: str, name: str) -> NetClassIface:
    with os.scandir(device_path) as listing:
        entries = sorted(listing, key=lambda entry: entry.name)

    values: dict[str, object] = {}
    for entry in entries:
        if not entry.is_file(follow_symlinks=False):
            continue
        try:
            value = read_sys_file(entry.path)
        except OSError as err:
            if isinstance(err, FileNotFoundError) or err.errno in _SKIPPED_ERRNOS:
                continue
            raise _wrap(err, f"failed to read file {entry.path!r}") from err

        if entry.name in _STRING_FILES:
            values[_STRING_FILES[entry.name]] = value
        elif entry.name in _INT_FILES:
            values[_INT_FILES[entry.name]] = _int_or_none(value)

    return NetClassIface(name=name, **values)


def net_class_devices(fs: SysFS) -> list[str]:
    """Return the names of the entries in class/net that are not regular files."""
    path = fs.path(*_CLASS_PATH)
    try:
        with os.scandir(path) as listing:
            entries = sorted(listing, key=lambda entry: entry.name)
    except OSError as err:
        raise _wrap(err, f"cannot access {path} dir") from err
    return [entry.name for entry in entries if not entry.is_file(follow_symlinks=False)]


def net_class(fs: SysFS) -> dict[str, NetClassIface]:
    """Return the attributes of every interface in class/net, keyed by interface name."""
    path = fs.path(*_CLASS_PATH)
    return {
        device: _parse_iface(os.path.join(path, device), device)
        for device in net_class_devices(fs)
    }