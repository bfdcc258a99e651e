from pathlib import Path

import pytest

from kstatfs.fs import SysFS
from kstatfs.power_supply import PowerSupply, power_supply_class


def _write(directory: Path, files: dict) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content + "\n")


@pytest.fixture
def sys_root(tmp_path: Path) -> Path:
    base = tmp_path / "class" / "power_supply"
    _write(base / "AC", {"online": "0", "type": "Mains", "uevent": "POWER_SUPPLY_NAME=AC"})
    (base / "AC" / "power").mkdir()
    _write(
        base / "BAT0",
        {
            "alarm": "2503000",
            "capacity": "98",
            "capacity_level": "Normal",
            "cycle_count": "0",
            "energy_full": "50060000",
            "energy_full_design": "47520000",
            "energy_now": "49450000",
            "manufacturer": "LGC",
            "model_name": "LNV-45N1",
            "power_now": "4830000",
            "present": "1",
            "serial_number": "SN0000",
            "status": "Discharging",
            "technology": "Li-ion",
            "type": "Battery",
            "voltage_min_design": "10800000",
            "voltage_now": "12229000",
        },
    )
    return tmp_path


def test_power_supply_class(sys_root: Path) -> None:
    got = power_supply_class(SysFS(str(sys_root)))
    want = {
        "AC": PowerSupply(name="AC", type="Mains", online=0),
        "BAT0": PowerSupply(
            name="BAT0",
            capacity=98,
            capacity_level="Normal",
            cycle_count=0,
            energy_full=50060000,
            energy_full_design=47520000,
            energy_now=49450000,
            manufacturer="LGC",
            model_name="LNV-45N1",
            power_now=4830000,
            present=1,
            serial_number="SN0000",
            status="Discharging",
            technology="Li-ion",
            type="Battery",
            voltage_min_design=10800000,
            voltage_now=12229000,
        ),
    }
    assert got == want


def test_hex_value_is_accepted(tmp_path: Path) -> None:
    _write(tmp_path / "class" / "power_supply" / "X", {"capacity": "0x10"})
    got = power_supply_class(SysFS(str(tmp_path)))
    assert got["X"].capacity == 16


def test_invalid_number_raises(tmp_path: Path) -> None:
    _write(tmp_path / "class" / "power_supply" / "BAT1", {"capacity": "lots"})
    with pytest.raises(ValueError):
        power_supply_class(SysFS(str(tmp_path)))


def test_missing_class_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError, match="failed to list power supplies"):
        power_supply_class(SysFS(str(tmp_path)))


def test_empty_class_directory(tmp_path: Path) -> None:
    (tmp_path / "class" / "power_supply").mkdir(parents=True)
    assert power_supply_class(SysFS(str(tmp_path))) == {}