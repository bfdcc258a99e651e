# kstatfs

`kstatfs` reads kernel and hardware statistics from the Linux `/proc` and
`/sys` pseudo-filesystems. It returns them as plain Python dataclasses.
It uses only the standard library.

## Installation

```
pip install kstatfs
```

## Opening a filesystem

`kstatfs.fs.ProcFS(mount_point)` and `kstatfs.fs.SysFS(mount_point)` stand for
a proc and a sys filesystem mounted at a directory. They default to `/proc` and
`/sys`. Both raise an `OSError` if the mount point does not exist or is not a
directory. `path(*parts)` gives the path of a file below the mount point.
`kstatfs.fs.new_default_fs()` opens `/sys`.

You can pass any other directory, such as a copy of the files in a test
fixture tree.

`kstatfs.fs` also has the small helpers that the readers use:
`read_sys_file`, `read_uint_from_file`, `parse_int`, `parse_uint` and
`parse_bool`.

## What it covers

From a `ProcFS`:

- `kstatfs.vm.read_vm(fs)` returns a `VM` with the settings in `sys/vm`. Files that cannot be read are skipped.
- `kstatfs.xfrm.read_xfrm_stat(fs)` returns an `XfrmStat` with the IPsec counters in `net/xfrm_stat`. `parse_xfrm_stat(text)` parses text that is already loaded.
- `kstatfs.zoneinfo.read_zoneinfo(fs)` returns a list of `Zoneinfo`, one per node block of `zoneinfo`. `parse_zoneinfo(data)` parses text or bytes.

From a `SysFS`:

- `kstatfs.cooling_device.class_cooling_device_stats(fs)` covers thermal cooling devices.
- `kstatfs.thermal.class_thermal_zone_stats(fs)` covers thermal zones. `mode` and `passive` are `None` when the zone does not expose them.
- `kstatfs.vulnerability.cpu_vulnerabilities(fs)` covers CPU vulnerability and mitigation states. `parse_vulnerability(name, value)` parses one entry and raises `ValueError` on an unknown state.
- `kstatfs.infiniband.infiniband_class(fs)` maps device names to `InfiniBandDevice` records, with their ports and counters. `parse_state` and `parse_rate` parse the port `state` and `rate` files. Rates come back in bytes per second.
- `kstatfs.clocksource.clock_sources(fs)` lists clocksource devices, each with its available and current clock source.
- `kstatfs.power_supply.power_supply_class(fs)` maps power supply names, such as batteries and AC adapters, to `PowerSupply` records.
- `kstatfs.powercap.get_rapl_zones(fs)` lists RAPL power zones. On a zone, `RaplZone.energy_microjoules()` reads the current energy counter.
- `kstatfs.net_class.net_class_devices(fs)` lists network interfaces. `net_class(fs)` maps each interface to a `NetClassIface`.
- `kstatfs.system_cpu.cpus(fs)` lists `CPU` directories. Each has `number()`, `topology()` and `thermal_throttle()`. `kstatfs.system_cpu.system_cpufreq(fs)` reads the cpufreq data of all CPUs in parallel.

XFS:

- `kstatfs.xfs.XFS(proc_mount_point, sys_mount_point)` reads the totals with `proc_stat()` and the per-filesystem statistics with `sys_stats()`. A blank mount point falls back to the default location. `new_default_xfs()` opens `/proc` and `/sys`.
- `kstatfs.xfs_parse.parse_stats(stream)` parses lines in the `/proc/fs/xfs/stat` format from a text or binary stream. It returns a `kstatfs.xfs_types.Stats`.

Listings that come from globbing or reading a directory are sorted by name.

## Usage

```python
from kstatfs.fs import ProcFS, SysFS
from kstatfs.vm import read_vm
from kstatfs.thermal import class_thermal_zone_stats
from kstatfs.xfs import XFS

proc = ProcFS("/proc")
vm = read_vm(proc)
print(vm.swappiness)

sys_fs = SysFS("/sys")
for zone in class_thermal_zone_stats(sys_fs):
    print(zone.name, zone.type, zone.temp)

xfs = XFS("/proc", "/sys")
print(xfs.proc_stat().extent_allocation.extents_allocated)
```

## Missing values and errors

When a file does not provide an optional numeric value, the field is `None`.
A missing text value is an empty string. Counters of `XfrmStat` and of the XFS
records stay `0` when they are absent.

Files that are missing or that cannot be read raise `OSError`. Malformed
content raises `ValueError`. There are exceptions where the kernel is known to
leave files unreadable:

- Write-only VM settings are skipped.
- Power supply, network and InfiniBand attributes that report "not supported" or "invalid argument" are skipped.
- InfiniBand counters that read `N/A (no PMA)` are skipped.

## What it does not do

`kstatfs` is a library only. It has no command-line tool and no metrics
endpoint or exporter. It does not write to any kernel setting. It only reads
the files listed above.