"""
Root conftest.py — keeps the user's own chatgrid config out of test runs.
"""
from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point $CHATGRID_CONFIG at a path that does not exist, so defaults apply."""
    monkeypatch.setenv("CHATGRID_CONFIG", str(tmp_path / "no-config.json"))
