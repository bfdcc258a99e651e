"""Power supplies from /sys/class/power_supply."""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass, fields

from kstatfs.fs import SysFS, parse_int, read_sys_file

_CLASS_PATH = ("class", "power_supply")
_SKIPPED_ERRNOS = frozenset({errno.EOPNOTSUPP, errno.ENOTSUP, errno.EINVAL})


@dataclass
class PowerSupply:
    """Attributes of one power supply; numbers are None and strings empty when absent."""

    name: str = ""
    authentic: int | None = None
    calibrate: int | None = None
    capacity: int | None = None
    capacity_alert_max: int | None = None
    capacity_alert_min: int | None = None
    capacity_level: str = ""
    charge_avg: int | None = None
    charge_control_limit: int | None = None
    charge_control_limit_max: int | None = None
    charge_counter: int | None = None
    charge_empty: int | None = None
    charge_empty_design: int | None = None
    charge_full: int | None = None
    charge_full_design: int | None = None
    charge_now: int | None = None
    charge_term_current: int | None = None
    charge_type: str = ""
    constant_charge_current: int | None = None
    constant_charge_current_max: int | None = None
    constant_charge_voltage: int | None = None
    constant_charge_voltage_max: int | None = None
    current_avg: int | None = None
    current_boot: int | None = None
    current_max: int | None = None
    current_now: int | None = None
    cycle_count: int | None = None
    energy_avg: int | None = None
    energy_empty: int | None = None
    energy_empty_design: int | None = None
    energy_full: int | None = None
    energy_full_design: int | None = None
    energy_now: int | None = None
    health: str = ""
    input_current_limit: int | None = None
    manufacturer: str = ""
    model_name: str = ""
    online: int | None = None
    power_avg: int | None = None
    power_now: int | None = None
    precharge_current: int | None = None
    present: int | None = None
    scope: str = ""
    serial_number: str = ""
    status: str = ""
    technology: str = ""
    temp: int | None = None
    temp_alert_max: int | None = None
    temp_alert_min: int | None = None
    temp_ambient: int | None = None
    temp_ambient_max: int | None = None
    temp_ambient_min: int | None = None
    temp_max: int | None = None
    temp_min: int | None = None
    time_to_empty_avg: int | None = None
    time_to_empty_now: int | None = None
    time_to_full_avg: int | None = None
    time_to_full_now: int | None = None
    type: str = ""
    usb_type: str = ""
    voltage_avg: int | None = None
    voltage_boot: int | None = None
    voltage_max: int | None = None
    voltage_max_design: int | None = None
    voltage_min: int | None = None
    voltage_min_design: int | None = None
    voltage_now: int | None = None
    voltage_ocv: int | None = None


_STRING_FILES = frozenset(
    f.name for f in fields(PowerSupply) if f.type == "str" and f.name != "name"
)
_INT_FILES = frozenset(
    f.name for f in fields(PowerSupply) if f.name != "name" and f.name not in _STRING_FILES
)


def _wrap(err: OSError, message: str) -> OSError:
    detail = err.strerror or str(err)
    if err.errno is None:
        return OSError(f"{message}: {detail}")
    return OSError(err.errno, f"{message}: {detail}")


def _parse_power_supply(path: str, name: str) -> PowerSupply:
    with os.scandir(path) as listing:
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
            values[entry.name] = value
        elif entry.name in _INT_FILES:
            values[entry.name] = parse_int(value)

    return PowerSupply(name=name, **values)


def power_supply_class(fs: SysFS) -> dict[str, PowerSupply]:
    """Return every power supply below class/power_supply, keyed by its name."""
    path = fs.path(*_CLASS_PATH)
    try:
        names = sorted(os.listdir(path))
    except OSError as err:
        raise _wrap(err, f"failed to list power supplies at {path!r}") from err
    return {name: _parse_power_supply(os.path.join(path, name), name) for name in names}