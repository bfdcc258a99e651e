"""CPU vulnerability states from /sys/devices/system/cpu/vulnerabilities."""

from __future__ import annotations

import glob
import os
from dataclasses import dataclass

from kstatfs.fs import SysFS

NOT_AFFECTED = "Not Affected"
VULNERABLE = "Vulnerable"
MITIGATION = "Mitigation"


@dataclass
class Vulnerability:
    """One vulnerability: its name, its state and the mitigation text, if any."""

    code_name: str
    state: str = ""
    mitigation: str = ""


def parse_vulnerability(name: str, value: str) -> Vulnerability:
    """Parse the content of one vulnerability file; raise ValueError on an unknown state."""
    value = value.strip()
    if value == NOT_AFFECTED:
        return Vulnerability(code_name=name, state=NOT_AFFECTED)
    for state in (VULNERABLE, MITIGATION):
        if value.startswith(state):
            detail = value.removeprefix(state).removeprefix(": ")
            return Vulnerability(code_name=name, state=state, mitigation=detail)
    raise ValueError(f"unknown vulnerability state for {name}: {value}")


def cpu_vulnerabilities(fs: SysFS) -> list[Vulnerability]:
    """Return every vulnerability listed by the kernel, ordered by name."""
    pattern = os.path.join(
        glob.escape(fs.path("devices", "system", "cpu", "vulnerabilities")), "*"
    )
    result = []
    for path in sorted(glob.glob(pattern)):
        with open(path, encoding="utf-8", errors="replace") as handle:
            result.append(parse_vulnerability(os.path.basename(path), handle.read()))
    return result