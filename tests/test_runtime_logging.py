from __future__ import annotations

import json

from certwatch.runtime_logging import write_run_log


def test_write_run_log(tmp_path):
    path = write_run_log(tmp_path / "log", "check", {"verdict": "no-warning", "exit_code": 1})

    assert path.parent == tmp_path / "log"
    assert path.name.endswith("_check.log")
    record = json.loads(path.read_text(encoding="utf-8"))
    assert record["command"] == "check"
    assert record["verdict"] == "no-warning"
    assert record["exit_code"] == 1
    assert "ts" in record


def test_command_name_is_sanitized(tmp_path):
    path = write_run_log(tmp_path, "check cert/x", {})

    assert path.name.endswith("_check_cert_x.log")
