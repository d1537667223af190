"""Pytest configuration shared by the unit and end-to-end suites.

What:
  Make the in-repo ``mailexport`` sources importable and apply a canned runtime
  configuration to every test.

Why:
  Tests must exercise the source tree rather than an installed wheel, and the
  runtime configuration is cached globally, so each test starts from a known
  file and an empty cache.

How:
  Prepend ``mailexport/src`` to ``sys.path`` at import time. The autouse
  :func:`runtime_config` fixture points ``MAILEXPORT_CONFIG_PATH`` at
  ``tests/data/config.yaml`` and resets the cache before and after each test.
"""

import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "mailexport" / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

import pytest

from mailexport.config.loader import reset_runtime_config

DATA_DIR = Path(__file__).resolve().parent / "data"
CONFIG_PATH = DATA_DIR / "config.yaml"
MESSAGE_PATH = DATA_DIR / "message.json"


@pytest.fixture(autouse=True)
def runtime_config(monkeypatch: pytest.MonkeyPatch):
    """Apply the canned configuration file for every test."""

    monkeypatch.setenv("MAILEXPORT_CONFIG_PATH", str(CONFIG_PATH))
    reset_runtime_config()
    try:
        yield
    finally:
        reset_runtime_config()


@pytest.fixture
def raw_message():
    """Decoded ``users.messages`` resource used across suites."""

    return json.loads(MESSAGE_PATH.read_text(encoding="utf-8"))
