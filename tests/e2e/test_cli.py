"""End-to-end tests asserting CLI commands behave as operators expect.

What:
  Launch the ``mailexport.cli`` module through ``python -m`` and validate the
  ``categories``, ``fields`` and ``transform`` commands against fixture files.

Why:
  These tests ensure the entry point wiring, option parsing, configuration
  bootstrap and exit codes work when invoked the same way operators do.

How:
  Construct subprocess invocations with a controlled ``PYTHONPATH`` pointing to
  the in-repo source tree and ``MAILEXPORT_CONFIG_PATH`` pointing at the test
  configuration, then assert on return codes, stdout rows and stderr logs.

Interfaces:
  ``test_categories_lists_registry``, ``test_fields_lists_catalogue``,
  ``test_transform_prints_redacted_row`` and the option and failure cases.

Invariants & Safety:
  - Tests run against the local source tree to avoid depending on installed
    packages.
  - stdout carries only data rows; diagnostics go to stderr.
"""

import json
import os
import pathlib
import subprocess
import sys


PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "tests" / "data"
MESSAGE_PATH = DATA_DIR / "message.json"


def _run_cli(*args: str) -> subprocess.CompletedProcess[str]:
    """Execute the mailexport CLI with the provided arguments.

    What:
      Spawns ``python -m mailexport.cli`` as a subprocess and returns the
      completed process handle.

    How:
      Clones the current environment, points ``PYTHONPATH`` at the repository
      source tree and the config variable at the test file, and captures
      stdout/stderr for assertions.
    """

    env = os.environ.copy()
    env["PYTHONPATH"] = str(PROJECT_ROOT / "mailexport" / "src")
    env["MAILEXPORT_CONFIG_PATH"] = str(DATA_DIR / "config.yaml")
    return subprocess.run(
        [sys.executable, "-m", "mailexport.cli", *args],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
        env=env,
        check=False,
    )


def _rows(result: subprocess.CompletedProcess[str]):
    return [json.loads(line) for line in result.stdout.splitlines()]


def test_categories_lists_registry():
    result = _run_cli("categories")
    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert len(lines) == 27
    assert lines[0].split()[:2] == ["credit_cards", "on"]
    assert lines[-1].split()[:2] == ["regular_urls", "off"]


def test_fields_lists_catalogue():
    result = _run_cli("fields")
    assert result.returncode == 0, result.stderr
    lines = result.stdout.splitlines()
    assert len(lines) == 21
    assert lines[0].split()[:3] == ["from_email", "sender", "on"]
    assert any(line.split()[:3] == ["body_text", "content", "off"] for line in lines)


def test_transform_prints_redacted_row():
    result = _run_cli("transform", str(MESSAGE_PATH))
    assert result.returncode == 0, result.stderr
    (row,) = _rows(result)
    assert row["from_email"] == "jane.roe@example.com"
    assert row["attachment_types"] == "application/octet-stream;pdf"
    assert row["body_text"] == (
        "Hello Jane,\nMy SSN is [REDACTED_TAX_ID] and my phone is [REDACTED_PHONE].\nThanks"
    )
    assert "batch_transformed" in result.stderr


def test_transform_overrides():
    result = _run_cli(
        "transform",
        str(MESSAGE_PATH),
        "--no-sanitize",
        "--fields",
        "subject,body_text",
        "--body-max-chars",
        "11",
    )
    assert result.returncode == 0, result.stderr
    (row,) = _rows(result)
    assert row["subject"] == "Your statement"
    assert row["body_text"] == "Hello Jane,"
    assert row["from_email"] == ""


def test_transform_category_selection():
    result = _run_cli("transform", str(MESSAGE_PATH), "--categories", "phone_numbers")
    assert result.returncode == 0, result.stderr
    (row,) = _rows(result)
    assert "123-45-6789" in row["body_text"]
    assert "[REDACTED_PHONE]" in row["body_text"]


def test_transform_list_document_keeps_order(tmp_path):
    raw = json.loads(MESSAGE_PATH.read_text(encoding="utf-8"))
    second = json.loads(json.dumps(raw))
    second["payload"]["headers"] = [{"name": "Subject", "value": "Second"}]
    batch = tmp_path / "batch.json"
    batch.write_text(json.dumps([raw, second]), encoding="utf-8")
    result = _run_cli("transform", str(batch), "--fields", "subject")
    assert result.returncode == 0, result.stderr
    assert [row["subject"] for row in _rows(result)] == ["Your statement", "Second"]


def test_transform_invalid_json_fails(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    result = _run_cli("transform", str(broken))
    assert result.returncode == 1
    assert result.stdout == ""
    assert "input_invalid" in result.stderr


def test_transform_unknown_category_fails():
    result = _run_cli("transform", str(MESSAGE_PATH), "--categories", "shoe_sizes")
    assert result.returncode == 1
    assert "options_invalid" in result.stderr


def test_transform_missing_config_fails(tmp_path):
    result = _run_cli("transform", str(MESSAGE_PATH), "--config", str(tmp_path / "absent.yaml"))
    assert result.returncode == 1
    assert "config_invalid" in result.stderr
