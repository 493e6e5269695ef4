"""
Tests for CLI flags and the main() entry point.
"""

import json
from pathlib import Path

import pytest

from blkinventory.__main__ import EXIT_ACQUISITION, EXIT_OK, EXIT_PARSE, format_tree, main
from blkinventory.cli import parse_args
from blkinventory.executor import RunResult
from blkinventory.parser import load_lsblk


def test_defaults():
    args = parse_args([])
    assert args.from_file is None
    assert args.timeout == 30
    assert args.in_bytes is False
    assert args.system is False
    assert args.non_system is False
    assert args.as_json is False
    assert args.output_dir is None


def test_all_flags_set():
    args = parse_args([
        "--from-file", "/tmp/lsblk.json",
        "--timeout", "2.5",
        "--bytes",
        "--non-system",
        "--json",
        "--output-dir", "/tmp/out",
    ])
    assert args.from_file == Path("/tmp/lsblk.json")
    assert args.timeout == 2.5
    assert args.in_bytes is True
    assert args.non_system is True
    assert args.as_json is True
    assert args.output_dir == Path("/tmp/out")


def test_system_and_non_system_are_exclusive():
    with pytest.raises(SystemExit) as exc_info:
        parse_args(["--system", "--non-system"])
    assert exc_info.value.code == 2


@pytest.mark.parametrize("value", ["0", "-1", "soon"])
def test_timeout_must_be_positive(value):
    with pytest.raises(SystemExit):
        parse_args(["--timeout", value])


def test_non_system_tree(fixtures_dir, capsys):
    rc = main(["--from-file", str(fixtures_dir / "lsblk_mountpoints.json"), "--non-system"])
    assert rc == EXIT_OK
    out = capsys.readouterr().out
    assert out.splitlines() == [
        "nvme0n1 259:2 1.7T disk",
        "nvme1n1 259:3 1.7T disk",
    ]


def test_system_tree(fixtures_dir, capsys):
    rc = main(["--from-file", str(fixtures_dir / "lsblk_mountpoints.json"), "--system"])
    assert rc == EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "sda 8:0 447.1G disk"
    assert "    md0 9:0 446.6G raid1 /" in lines
    assert "  sdb1 8:17 512M part /boot/efi" in lines


def test_json_output(fixtures_dir, capsys):
    rc = main(["--from-file", str(fixtures_dir / "lsblk_nvme_raid.json"), "--json", "--system"])
    assert rc == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert [d["name"] for d in data["blockdevices"]] == ["nvme3n1", "nvme2n1"]
    assert data["blockdevices"][0]["size"] == 960247313203


def test_runs_lsblk_through_executor(fixture_executor, capsys):
    rc = main(["--bytes", "--non-system"], executor=fixture_executor)
    assert rc == EXIT_OK
    assert fixture_executor.calls == [["lsblk", "--json", "--bytes"]]
    assert len(capsys.readouterr().out.splitlines()) == 8 * 3


def test_upstream_failure_exit_code(capsys):
    def failing(cmd, *, timeout=None):
        return RunResult(stdout="", stderr="lsblk: failed to access sysfs directory", returncode=32)

    assert main([], executor=failing) == EXIT_ACQUISITION
    err = capsys.readouterr().err
    assert err.startswith("[blkinventory] error:")
    assert "failed to access sysfs directory" in err


def test_missing_file_exit_code(tmp_path, capsys):
    assert main(["--from-file", str(tmp_path / "missing.json")]) == EXIT_ACQUISITION
    assert "cannot read" in capsys.readouterr().err


def test_parse_failure_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"blockdevices": [{"name": "sda"}]}')
    assert main(["--from-file", str(bad)]) == EXIT_PARSE
    assert "cannot parse lsblk output" in capsys.readouterr().err


def test_empty_document_prints_nothing(fixtures_dir, capsys):
    assert main(["--from-file", str(fixtures_dir / "lsblk_empty.json")]) == EXIT_OK
    assert capsys.readouterr().out == ""


def test_output_dir(fixtures_dir, tmp_path, capsys):
    out = tmp_path / "report"
    rc = main(["--from-file", str(fixtures_dir / "lsblk_bytes_extra.json"), "--output-dir", str(out)])
    assert rc == EXIT_OK
    assert (out / "block-devices.md").read_text().startswith("# Block Device Inventory")
    assert load_lsblk(out / "lsblk-snapshot.json") == load_lsblk(fixtures_dir / "lsblk_bytes_extra.json")


def test_format_tree_indents_children(fixtures_dir):
    devices = load_lsblk(fixtures_dir / "lsblk_bytes_extra.json")
    lines = format_tree(devices).splitlines()
    assert lines[0] == "loop0 7:0 64M loop /snap/core20/2015"
    assert "      vg0-root 253:1 100G lvm /,/var/lib/snapshots" in lines
    assert "      vg0-data 253:3 359.9G lvm" in lines


def test_non_utf8_file_exit_code(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_bytes(b'{"blockdevices": [{"name": "sd\xff"}]}')
    assert main(["--from-file", str(bad)]) == EXIT_PARSE
    err = capsys.readouterr().err
    assert "cannot parse lsblk output" in err
    assert "Traceback" not in err


def test_executor_os_error_exit_code(capsys):
    def broken(cmd, *, timeout=None):
        raise OSError(8, "Exec format error")

    assert main([], executor=broken) == EXIT_ACQUISITION
    err = capsys.readouterr().err
    assert "cannot run lsblk" in err
    assert "None" not in err
