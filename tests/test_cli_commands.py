# tests/test_cli_commands.py

import json
import logging
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from annomath.cli.main import cli
from annomath.utils.logging_config import PACKAGE_LOGGER

from conftest import original_value_body

# --- Test Fixtures ---

@pytest.fixture
def runner(monkeypatch, tmp_path):
    """CliRunner inside an empty directory with no ANNOMATH_* overrides."""
    for key in list(os.environ):
        if key.startswith("ANNOMATH_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    yield CliRunner()
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    data = {"functions": [
        {"id": "f_min", "type": "value", "description": "@min 1,5,3@",
         "params": [{"type": "stringParam_x"}], "content": original_value_body("f_min")},
        {"id": "f_plain", "type": "value", "description": "helper",
         "params": [], "content": original_value_body("f_plain")},
    ]}
    path = tmp_path / "project.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


def _last_line(output: str) -> str:
    return output.strip().splitlines()[-1]

# --- Test Cases: eval ---

def test_eval_operation_tag(runner):
    result = runner.invoke(cli, ["-q", "eval", "vector.dot", "-p", "1,2,3", "-p", "4,5,6"])
    assert result.exit_code == 0, result.output
    assert _last_line(result.output) == "32"

def test_eval_arithmetic(runner):
    result = runner.invoke(cli, ["-q", "eval", "(p[0] + 2) * 3", "-p", "4"])
    assert result.exit_code == 0, result.output
    assert _last_line(result.output) == "18"

def test_eval_unsupported_expression(runner):
    result = runner.invoke(cli, ["-q", "eval", "window.location = 'x'"])
    assert result.exit_code == 0, result.output
    assert "execution skipped" in result.output
    assert _last_line(result.output) == "0"

def test_eval_alert(runner):
    result = runner.invoke(cli, ["-q", "eval", "alert.param", "-p", "<b>hi</b>"])
    assert result.exit_code == 0, result.output
    assert "ALERT: bhi/b" in result.output

def test_eval_uses_configured_default(runner, monkeypatch):
    monkeypatch.setenv("ANNOMATH_EVALUATOR_DEFAULT_VALUE", "-1")
    result = runner.invoke(cli, ["-q", "eval", "import os"])
    assert _last_line(result.output) == "-1"

# --- Test Cases: catalog ---

def test_catalog_list(runner):
    result = runner.invoke(cli, ["-q", "catalog", "list"])
    assert result.exit_code == 0, result.output
    assert "min" in result.output
    assert "calculator" in result.output

def test_catalog_match(runner):
    result = runner.invoke(cli, ["-q", "catalog", "match", "@min 1,5,3@"])
    assert result.exit_code == 0, result.output
    assert "list.min" in result.output

def test_catalog_match_respects_kind(runner):
    result = runner.invoke(cli, ["-q", "catalog", "match", "@min 1,5,3@", "--kind", "normal"])
    assert result.exit_code == 0, result.output
    assert "No matching rules." in result.output

# --- Test Cases: project ---

def test_project_rewrite_and_restore(runner, project_file, tmp_path):
    rewritten = tmp_path / "rewritten.json"
    backups = tmp_path / "backups.json"
    restored = tmp_path / "restored.json"

    result = runner.invoke(cli, ["-q", "project", "rewrite", str(project_file), "-o", str(rewritten), "--backups", str(backups)])
    assert result.exit_code == 0, result.output
    assert "f_min: min" in result.output
    assert "Rewrote 1 function definition(s)" in result.output

    functions = {f["id"]: f for f in json.loads(rewritten.read_text(encoding="utf-8"))["functions"]}
    definition = functions["f_min"]["content"][0][0]
    assert definition["type"] == "function_create_value"
    assert definition["params"][0] == {"type": "stringParam_x"}
    assert definition["params"][3]["program"] == "list.min"
    assert functions["f_plain"]["content"] == original_value_body("f_plain")

    state = json.loads(backups.read_text(encoding="utf-8"))
    assert state["is_replaced"] is True
    assert list(state["backups"]) == ["f_min"]

    result = runner.invoke(cli, ["-q", "project", "restore", str(rewritten), "--backups", str(backups), "-o", str(restored)])
    assert result.exit_code == 0, result.output
    original = json.loads(project_file.read_text(encoding="utf-8"))
    assert json.loads(restored.read_text(encoding="utf-8")) == original

def test_project_call(runner, project_file):
    result = runner.invoke(cli, ["-q", "project", "call", str(project_file), "f_min", "2,9,-4"])
    assert result.exit_code == 0, result.output
    assert _last_line(result.output) == "-4"

def test_project_call_unrewritten_function(runner, project_file):
    result = runner.invoke(cli, ["-q", "project", "call", str(project_file), "f_plain", "1"])
    assert result.exit_code != 0
    assert "has not been rewritten" in result.output

def test_project_invalid_file(runner, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("[]", encoding="utf-8")
    result = runner.invoke(cli, ["-q", "project", "rewrite", str(bad), "-o", str(tmp_path / "out.json")])
    assert result.exit_code == 2
    assert "Invalid project file" in result.output

def test_project_rewrite_default_output_dir(runner, project_file, tmp_path, monkeypatch):
    monkeypatch.setenv("ANNOMATH_PATHS_OUTPUT_DIR", str(tmp_path / "out"))
    result = runner.invoke(cli, ["-q", "project", "rewrite", str(project_file)])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "project.json").is_file()
