# tests/test_cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from suitetrack.cli import run_cli


def _py(code: str) -> str:
    exe = str(Path(sys.executable))
    # This returns a shell command string. JSON will escape it safely.
    return f'"{exe}" -c "{code}"'


def _write_json_config(path: Path, groups: dict, **settings) -> None:
    path.write_text(
        json.dumps({"time_scale": 0, **settings, "groups": groups}), encoding="utf-8"
    )


def test_catalog_prints_groups_in_declared_order(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "suitetrack.json"
    _write_json_config(cfg, {"Zeta": ["b", "a"], "Alpha": ["x"]})

    code = run_cli(["--config", str(cfg), "catalog"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == ["Zeta: b a", "Alpha: x", "2 groups, 3 tests"]


def test_catalog_json_uses_builtin_catalog_by_default(
    capsys: pytest.CaptureFixture[str],
) -> None:
    code = run_cli(["catalog", "--json"])
    data = json.loads(capsys.readouterr().out)

    assert code == 0
    assert data["totalClasses"] == 2
    assert data["totalMethods"] == 13
    assert data["testClasses"]["UserServiceTest"][0] == "testGetAllUsers"


def test_run_all_streams_output_and_reports(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "suitetrack.json"
    _write_json_config(cfg, {"Unit": {"a": {"duration_ms": 5}, "b": {}}})

    code = run_cli(["--config", str(cfg), "run", "--poll-interval", "0.01"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == [
        "Starting test execution...",
        "Running Unit tests...",
        "Unit tests: 2 passed, 0 failed",
        "All tests completed successfully!",
        "OK Unit.a, 5ms",
        "OK Unit.b, 87ms",
        "COMPLETED: 2 tests, 2 passed, 0 failed, 0 skipped",
    ]


def test_run_single_target(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "suitetrack.json"
    _write_json_config(cfg, {"Unit": ["a", "b"]})

    code = run_cli(["--config", str(cfg), "run", "Unit.b", "--json"])
    data = json.loads(capsys.readouterr().out)

    assert code == 0
    assert data["state"] == "COMPLETED"
    assert [r["subject"] for r in data["results"]] == ["Unit.b"]
    assert data["endTime"] is not None


def test_run_with_failed_result_returns_1(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "suitetrack.json"
    _write_json_config(
        cfg,
        {"Proc": {"fail": {"command": _py("raise SystemExit(5)")}}},
        runner="process",
    )

    code = run_cli(["--config", str(cfg), "run", "--poll-interval", "0.01"])
    out = capsys.readouterr().out

    assert code == 1
    assert "FAIL Proc.fail" in out
    assert "Command exited with code 5" in out


def test_invalid_config_path_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing.json"

    code = run_cli(["--config", str(missing), "catalog"])
    captured = capsys.readouterr()

    assert code == 2
    assert captured.err != ""


def test_timeout_returns_2(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cfg = tmp_path / "suitetrack.json"
    _write_json_config(cfg, {"Slow": {"a": {"duration_ms": 500}}}, time_scale=1)

    code = run_cli(
        ["--config", str(cfg), "run", "--timeout", "0.05", "--poll-interval", "0.01"]
    )
    captured = capsys.readouterr()

    assert code == 2
    assert "still running" in captured.err
