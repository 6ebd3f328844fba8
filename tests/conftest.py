"""Test configuration helpers for ensuring local imports resolve."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_path() -> None:
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


_ensure_project_root_on_path()


@pytest.fixture
def write_list(tmp_path: Path):
    """Write lines to a UTF-8 word list under tmp_path and return its path."""

    def _write(name: str, lines) -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{ln}\n" for ln in lines), encoding="utf-8")
        return path

    return _write
