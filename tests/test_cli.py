"""Tests for dependable CLI entrypoints."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Tuple

import pytest

import dependable.main as main
from dependable.cli import report as report_module
from dependable.runtime import runner as runner_module

AUDIT_CLEAN = {
    "auditReportVersion": 2,
    "metadata": {
        "vulnerabilities": {
            "info": 0,
            "low": 0,
            "moderate": 0,
            "high": 0,
            "critical": 0,
            "total": 0,
        }
    },
    "advisories": {},
}

AUDIT_HIGH = {
    "metadata": {"vulnerabilities": {"high": 1, "total": 1}},
    "advisories": {
        "1179": {
            "severity": "high",
            "title": "Prototype Pollution",
            "url": "https://example.com/advisory/1179",
            "module_name": "minimist",
            "vulnerable_versions": "<0.2.1",
            "patched_versions": ">=0.2.1",
            "overview": "Affected versions are vulnerable to prototype pollution.",
        }
    },
}

OUTDATED = {
    "express": {
        "current": "4.17.1",
        "wanted": "4.17.1",
        "latest": "4.18.0",
        "dependent": "dependable",
    }
}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text(
        json.dumps(
            {
                "name": "demo",
                "dependencies": {"express": "^4.17.1", "lodash": "^4.17.21"},
            }
        ),
        encoding="utf-8",
    )
    return tmp_path


def _as_bytes(payload) -> bytes:
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return json.dumps(payload).encode("utf-8")


def _fake_npm(
    monkeypatch: pytest.MonkeyPatch,
    audit=AUDIT_CLEAN,
    outdated=None,
) -> List[List[str]]:
    """Stub npm so audit/outdated print the given payloads and exit 1."""
    calls: List[List[str]] = []
    outputs: Dict[str, Tuple[int, bytes]] = {
        "audit": (1, _as_bytes(audit)),
        "outdated": (1, _as_bytes(outdated or {})),
    }

    def fake_run(cmd, **kwargs):
        calls.append(list(cmd))
        code, stdout = outputs[cmd[1]]
        return subprocess.CompletedProcess(cmd, code, stdout, b"")

    monkeypatch.setattr(runner_module.subprocess, "run", fake_run)
    return calls


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)


def test_console_format_prints_summary_then_report(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch, outdated=OUTDATED)

    exit_code = main.main([str(project)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "NPM Audit Summary: Total: 0, Critical: 0, High: 0, Moderate: 0, Low: 0" in out
    assert "NPM Outdated Summary: Total outdated packages: 1" in out
    assert out.index("NPM Outdated Summary") < out.index("# Dependable Health Report")
    assert "- express: Current 4.17.1, Wanted 4.17.1, Latest 4.18.0" in out


def test_json_format(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch)

    exit_code = main.main([str(project), "--format", "json"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["dependencies"] == {"express": "^4.17.1", "lodash": "^4.17.21"}
    assert output["audit"]["metadata"]["vulnerabilities"]["total"] == 0
    assert output["outdated"] == {}


def test_markdown_format_has_no_summary_lines(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch, audit=AUDIT_HIGH, outdated=OUTDATED)

    exit_code = main.main([str(project), "--format", "markdown"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.startswith("# Dependable Health Report")
    assert "Audit Summary" not in out
    assert "### Prototype Pollution (Severity: high)" in out
    assert "- Package: minimist" in out


def test_unknown_format_renders_markdown_without_summary(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch)

    exit_code = main.main([str(project), "--format", "html"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.startswith("# Dependable Health Report")
    assert "Audit Summary" not in out


def test_missing_manifest_skips_commands(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    calls = _fake_npm(monkeypatch)

    exit_code = main.main([str(tmp_path)])

    assert exit_code == 1
    assert calls == []
    assert capsys.readouterr().out == ""


def test_command_failure_prints_no_report(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch, audit="npm ERR! code ENOLOCK")

    exit_code = main.main([str(project), "--format", "markdown"])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


def test_fail_on_threshold(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch, audit=AUDIT_HIGH)

    assert main.main([str(project), "-f", "markdown", "--fail-on", "high"]) == 2
    assert "### Prototype Pollution" in capsys.readouterr().out
    assert main.main([str(project), "-f", "markdown", "--fail-on", "critical"]) == 0


def test_overrides_reach_runner(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    calls = _fake_npm(monkeypatch)

    exit_code = main.main(
        [
            str(project),
            "--package-manager",
            "pnpm",
            "--sequential",
            "--format",
            "json",
        ]
    )

    assert exit_code == 0
    assert calls == [["pnpm", "audit", "--json"], ["pnpm", "outdated", "--json"]]
    capsys.readouterr()


def test_invalid_config_fails(
    monkeypatch: pytest.MonkeyPatch, project: Path
) -> None:
    calls = _fake_npm(monkeypatch)

    assert main.main([str(project), "--config", '{"command_timeout": -1}']) == 1
    assert calls == []


def test_main_uses_sys_argv(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["dependable", str(project), "--prod-only", "-f", "json"])

    assert main.main() == 0
    assert json.loads(capsys.readouterr().out)["dependencies"]["express"] == "^4.17.1"


def test_report_command_accepts_namespace(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """report_command works with a bare namespace, like programmatic callers."""
    _fake_npm(monkeypatch)
    args = SimpleNamespace(path=str(project), format="markdown")

    assert report_module.report_command(args) == 0
    assert "## Project Dependencies" in capsys.readouterr().out


def test_undecodable_command_output_exits_cleanly(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _fake_npm(monkeypatch, audit=b"\xff\xfe not json")

    assert main.main([str(project), "--format", "json"]) == 1
    assert capsys.readouterr().out == ""


def test_multi_location_outdated_entries(
    monkeypatch: pytest.MonkeyPatch, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    outdated = {
        "lodash": [
            {"current": "4.17.15", "wanted": "4.17.21", "latest": "4.17.21",
             "dependent": "app", "location": "packages/app/node_modules/lodash"},
            {"current": "4.17.20", "wanted": "4.17.21", "latest": "4.17.21",
             "dependent": "lib", "location": "packages/lib/node_modules/lodash"},
        ]
    }
    _fake_npm(monkeypatch, outdated=outdated)

    assert main.main([str(project)]) == 0
    out = capsys.readouterr().out
    assert "NPM Outdated Summary: Total outdated packages: 1" in out
    assert "- lodash: Current 4.17.15, Wanted 4.17.21, Latest 4.17.21" in out
    assert "- lodash: Current 4.17.20, Wanted 4.17.21, Latest 4.17.21" in out
