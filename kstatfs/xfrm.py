"""IPsec transformation statistics from /proc/net/xfrm_stat."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields

from kstatfs.fs import ProcFS

_DECIMAL = re.compile(r"[+-]?[0-9]+")


@dataclass
class XfrmStat:
    """Counters of /proc/net/xfrm_stat; counters missing from the file stay 0."""

    xfrm_in_error: int = 0
    xfrm_in_buffer_error: int = 0
    xfrm_in_hdr_error: int = 0
    xfrm_in_no_states: int = 0
    xfrm_in_state_proto_error: int = 0
    xfrm_in_state_mode_error: int = 0
    xfrm_in_state_seq_error: int = 0
    xfrm_in_state_expired: int = 0
    xfrm_in_state_mismatch: int = 0
    xfrm_in_state_invalid: int = 0
    xfrm_in_tmpl_mismatch: int = 0
    xfrm_in_no_pols: int = 0
    xfrm_in_pol_block: int = 0
    xfrm_in_pol_error: int = 0
    xfrm_out_error: int = 0
    xfrm_out_bundle_gen_error: int = 0
    xfrm_out_bundle_check_error: int = 0
    xfrm_out_no_states: int = 0
    xfrm_out_state_proto_error: int = 0
    xfrm_out_state_mode_error: int = 0
    xfrm_out_state_seq_error: int = 0
    xfrm_out_state_expired: int = 0
    xfrm_out_pol_block: int = 0
    xfrm_out_pol_dead: int = 0
    xfrm_out_pol_error: int = 0
    xfrm_fwd_hdr_error: int = 0
    xfrm_out_state_invalid: int = 0
    xfrm_acquire_error: int = 0


_KERNEL_NAMES = {
    "".join(part.capitalize() for part in field.name.split("_")): field.name
    for field in fields(XfrmStat)
}


def parse_xfrm_stat(text: str, source: str = "xfrm_stat") -> XfrmStat:
    """Parse the text of an xfrm_stat file; source names it in error messages."""
    counters: dict[str, int] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) != 2:
            raise ValueError(f"couldn't parse {source} line {line}")
        name, raw = parts
        if not _DECIMAL.fullmatch(raw):
            raise ValueError(f"invalid counter value {raw!r} in {source}")
        value = int(raw)
        if name in _KERNEL_NAMES:
            counters[_KERNEL_NAMES[name]] = value
    return XfrmStat(**counters)


def read_xfrm_stat(fs: ProcFS) -> XfrmStat:
    """Read net/xfrm_stat below the proc mount point."""
    path = fs.path("net", "xfrm_stat")
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_xfrm_stat(handle.read(), path)