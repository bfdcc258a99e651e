"""CPU topology, thermal throttling and frequency scaling from /sys/devices/system/cpu."""

from __future__ import annotations

import glob
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from kstatfs.fs import SysFS, read_sys_file, read_uint_from_file


@dataclass
class CPUTopology:
    """Contents of cpuN/topology."""

    core_id: str = ""
    core_siblings_list: str = ""
    physical_package_id: str = ""
    thread_siblings_list: str = ""


@dataclass
class CPUThermalThrottle:
    """Contents of cpuN/thermal_throttle."""

    core_throttle_count: int = 0
    package_throttle_count: int = 0


@dataclass
class SystemCPUCpufreqStats:
    """Contents of cpuN/cpufreq; frequencies are None when not readable."""

    name: str = ""
    cpuinfo_current_frequency: int | None = None
    cpuinfo_minimum_frequency: int | None = None
    cpuinfo_maximum_frequency: int | None = None
    cpuinfo_transition_latency: int | None = None
    scaling_current_frequency: int | None = None
    scaling_minimum_frequency: int | None = None
    scaling_maximum_frequency: int | None = None
    available_governors: str = ""
    driver: str = ""
    governor: str = ""
    related_cpus: str = ""
    set_speed: str = ""


@dataclass(frozen=True)
class CPU:
    """A CPU directory such as /sys/devices/system/cpu/cpu0."""

    path: str

    def number(self) -> str:
        """Return the CPU's ID number as found in its directory name."""
        return os.path.basename(self.path).removeprefix("cpu")

    def topology(self) -> CPUTopology:
        """Read the topology of this CPU."""
        path = os.path.join(self.path, "topology")
        os.stat(path)
        return CPUTopology(
            core_id=read_sys_file(os.path.join(path, "core_id")),
            physical_package_id=read_sys_file(os.path.join(path, "physical_package_id")),
            core_siblings_list=read_sys_file(os.path.join(path, "core_siblings_list")),
            thread_siblings_list=read_sys_file(os.path.join(path, "thread_siblings_list")),
        )

    def thermal_throttle(self) -> CPUThermalThrottle:
        """Read the thermal throttle counters of this CPU."""
        path = os.path.join(self.path, "thermal_throttle")
        os.stat(path)
        package = read_uint_from_file(os.path.join(path, "package_throttle_count"))
        core = read_uint_from_file(os.path.join(path, "core_throttle_count"))
        return CPUThermalThrottle(core_throttle_count=core, package_throttle_count=package)


_UINT_FILES = {
    "cpuinfo_cur_freq": "cpuinfo_current_frequency",
    "cpuinfo_max_freq": "cpuinfo_maximum_frequency",
    "cpuinfo_min_freq": "cpuinfo_minimum_frequency",
    "cpuinfo_transition_latency": "cpuinfo_transition_latency",
    "scaling_cur_freq": "scaling_current_frequency",
    "scaling_max_freq": "scaling_maximum_frequency",
    "scaling_min_freq": "scaling_minimum_frequency",
}
_STRING_FILES = {
    "scaling_available_governors": "available_governors",
    "scaling_driver": "driver",
    "scaling_governor": "governor",
    "related_cpus": "related_cpus",
    "scaling_setspeed": "set_speed",
}


def _cpu_paths(fs: SysFS) -> list[str]:
    pattern = os.path.join(glob.escape(fs.path("devices", "system", "cpu")), "cpu[0-9]*")
    return sorted(glob.glob(pattern))


def cpus(fs: SysFS) -> list[CPU]:
    """Return every CPU directory, ordered by directory name."""
    return [CPU(path) for path in _cpu_paths(fs)]


def _parse_cpufreq(path: str, name: str) -> SystemCPUCpufreqStats:
    values: dict[str, object] = {}
    for filename, attribute in _UINT_FILES.items():
        try:
            values[attribute] = read_uint_from_file(os.path.join(path, filename))
        except (FileNotFoundError, PermissionError):
            continue
    for filename, attribute in _STRING_FILES.items():
        values[attribute] = read_sys_file(os.path.join(path, filename))
    return SystemCPUCpufreqStats(name=name, **values)


def system_cpufreq(fs: SysFS) -> list[SystemCPUCpufreqStats]:
    """Return frequency stats for every CPU, one entry per CPU directory.

    CPUs without a cpufreq directory keep an empty entry at their position.
    The CPUs are read in parallel because the kernel delays each access.
    """
    paths = _cpu_paths(fs)
    results = [SystemCPUCpufreqStats() for _ in paths]

    jobs: list[tuple[int, str, str]] = []
    for position, path in enumerate(paths):
        cpufreq_path = os.path.join(path, "cpufreq")
        try:
            os.stat(cpufreq_path)
        except FileNotFoundError:
            continue
        jobs.append((position, cpufreq_path, os.path.basename(path).removeprefix("cpu")))

    if jobs:
        with ThreadPoolExecutor(max_workers=len(jobs)) as pool:
            futures = [
                (position, pool.submit(_parse_cpufreq, cpufreq_path, name))
                for position, cpufreq_path, name in jobs
            ]
            for position, future in futures:
                results[position] = future.result()
    return results