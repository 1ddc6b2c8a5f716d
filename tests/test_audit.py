"""Tests for the audit logger."""

import logging
from datetime import datetime

import pytest

from javaslice.audit import AuditLogger, normalise_ip, normalise_payload

FIXED_NOW = datetime(2024, 5, 6, 7, 8, 9)


@pytest.mark.parametrize("ip, expected", [
    ("1.2.3.4, 5.6.7.8", "1.2.3.4"),
    ("::ffff:10.0.0.1", "10.0.0.1"),
    (" ::ffff:10.0.0.1 , 9.9.9.9", "10.0.0.1"),
    ("2001:db8::1", "2001:db8::1"),
    (None, "unknown"),
    ("   ", "unknown"),
    (",10.0.0.1", "unknown"),
    (42, "unknown"),
])
def test_normalise_ip(ip, expected):
    assert normalise_ip(ip) == expected


def test_normalise_payload_truncates():
    payload = normalise_payload(list(range(60)), max_entries=50)

    assert len(payload) == 51
    assert payload[:50] == list(range(50))
    assert payload[-1] == "...+10"


def test_normalise_payload_at_limit_has_no_marker():
    assert normalise_payload(list(range(50)), max_entries=50) == list(range(50))


def test_normalise_payload_scalars_and_none():
    assert normalise_payload(None) == []
    assert normalise_payload("x") == ["x"]
    assert normalise_payload({"a": 1}) == [{"a": 1}]
    assert normalise_payload((1, 2)) == [1, 2]


def test_log_writes_line_to_daily_file(tmp_path, quiet_console):
    audit = AuditLogger(log_root=tmp_path, console=quiet_console, clock=lambda: FIXED_NOW)
    audit.log(ip="1.2.3.4", action="INSERT", table="users", data=[{"id": 1}])

    expected = '[2024-05-06 07:08:09] [INFO] [SQL] ip=1.2.3.4 action=INSERT table=users data=[{"id":1}]'
    log_file = tmp_path / "20240506" / "20240506_log_1"
    assert log_file.read_text(encoding="utf-8") == expected + "\n"
    assert expected in quiet_console.file.getvalue()


def test_log_defaults(tmp_path, quiet_console):
    audit = AuditLogger(log_root=tmp_path, console=quiet_console, clock=lambda: FIXED_NOW)
    audit.log()

    content = (tmp_path / "20240506" / "20240506_log_1").read_text(encoding="utf-8")
    assert "ip=unknown action=UNKNOWN table=unknown data=[]" in content


def test_log_truncates_payload(tmp_path, quiet_console):
    audit = AuditLogger(log_root=tmp_path, max_entries=2, console=quiet_console, clock=lambda: FIXED_NOW)
    audit.log(action="DELETE", table="t", data=[1, 2, 3, 4])

    content = (tmp_path / "20240506" / "20240506_log_1").read_text(encoding="utf-8")
    assert content.endswith('data=[1,2,"...+2"]\n')


def test_log_rolls_over_full_batch(tmp_path, quiet_console):
    audit = AuditLogger(log_root=tmp_path, max_bytes=10, console=quiet_console, clock=lambda: FIXED_NOW)
    audit.log(action="A")
    audit.log(action="B")

    day_dir = tmp_path / "20240506"
    assert "action=A" in (day_dir / "20240506_log_1").read_text(encoding="utf-8")
    assert "action=B" in (day_dir / "20240506_log_2").read_text(encoding="utf-8")


def test_log_appends_until_limit(tmp_path, quiet_console):
    audit = AuditLogger(log_root=tmp_path, console=quiet_console, clock=lambda: FIXED_NOW)
    audit.log(action="A")
    audit.log(action="B")

    day_dir = tmp_path / "20240506"
    assert sorted(p.name for p in day_dir.iterdir()) == ["20240506_log_1"]
    assert len((day_dir / "20240506_log_1").read_text(encoding="utf-8").splitlines()) == 2


def test_resolve_log_file_continues_highest_batch(tmp_path, quiet_console):
    day_dir = tmp_path / "20240506"
    day_dir.mkdir()
    (day_dir / "20240506_log_3").write_text("x")
    (day_dir / "unrelated").write_text("x")

    audit = AuditLogger(log_root=tmp_path, console=quiet_console)
    assert audit.resolve_log_file("20240506") == day_dir / "20240506_log_3"


def test_log_failures_are_only_warned(tmp_path, quiet_console, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    audit = AuditLogger(log_root=blocker, console=quiet_console, clock=lambda: FIXED_NOW)

    with caplog.at_level(logging.WARNING, logger="javaslice.audit.logger"):
        audit.log(action="INSERT")

    assert "Failed to write audit log" in caplog.text


def test_from_config(tmp_path, quiet_console):
    config = {"audit": {"log_root": str(tmp_path), "max_bytes": 5, "max_entries": 3}}
    audit = AuditLogger.from_config(config, console=quiet_console)

    assert audit.log_root == tmp_path
    assert audit.max_bytes == 5
    assert audit.max_entries == 3
