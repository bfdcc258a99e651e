import pytest

from kstatfs.fs import SysFS
from kstatfs.vulnerability import (
    MITIGATION,
    NOT_AFFECTED,
    VULNERABLE,
    Vulnerability,
    cpu_vulnerabilities,
    parse_vulnerability,
)


def test_not_affected():
    assert parse_vulnerability("meltdown", "Not Affected\n") == Vulnerability(
        code_name="meltdown", state=NOT_AFFECTED, mitigation=""
    )


def test_mitigation_text_is_kept():
    result = parse_vulnerability("spectre_v2", "Mitigation: Full generic retpoline\n")
    assert result.state == MITIGATION
    assert result.mitigation == "Full generic retpoline"
    assert result.code_name == "spectre_v2"


def test_vulnerable_without_detail():
    result = parse_vulnerability("mds", "Vulnerable")
    assert result.state == VULNERABLE
    assert result.mitigation == ""


def test_vulnerable_with_detail():
    result = parse_vulnerability("mds", "Vulnerable: Clear CPU buffers attempted, no microcode")
    assert result.state == VULNERABLE
    assert result.mitigation == "Clear CPU buffers attempted, no microcode"


def test_unknown_state_raises():
    with pytest.raises(ValueError, match="unknown vulnerability state for l1tf"):
        parse_vulnerability("l1tf", "Unknown")


def test_cpu_vulnerabilities_reads_directory(tmp_path):
    directory = tmp_path / "devices" / "system" / "cpu" / "vulnerabilities"
    directory.mkdir(parents=True)
    (directory / "spectre_v1").write_text("Mitigation: __user pointer sanitization\n")
    (directory / "meltdown").write_text("Not Affected\n")
    result = cpu_vulnerabilities(SysFS(str(tmp_path)))
    assert [v.code_name for v in result] == ["meltdown", "spectre_v1"]
    assert result[0].state == NOT_AFFECTED
    assert result[1].mitigation == "__user pointer sanitization"


def test_cpu_vulnerabilities_propagates_parse_error(tmp_path):
    directory = tmp_path / "devices" / "system" / "cpu" / "vulnerabilities"
    directory.mkdir(parents=True)
    (directory / "srbds").write_text("Unknown: Dependent on hypervisor status\n")
    with pytest.raises(ValueError):
        cpu_vulnerabilities(SysFS(str(tmp_path)))


def test_no_directory_gives_empty_list(tmp_path):
    assert cpu_vulnerabilities(SysFS(str(tmp_path))) == []