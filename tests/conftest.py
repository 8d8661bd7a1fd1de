from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _clean_tasklaunch_env(monkeypatch):
    """Keep TASKLAUNCH_* variables of the developer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("TASKLAUNCH_"):
            monkeypatch.delenv(name, raising=False)
