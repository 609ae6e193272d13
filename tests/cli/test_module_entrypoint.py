"""Tests for running netstar as a module (`python -m netstar`)."""

from __future__ import annotations

import runpy
from unittest.mock import patch

import pytest


def test_module_help_exits_zero() -> None:
    """Running with --help should exit cleanly with code 0."""
    with patch("sys.argv", ["netstar", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("netstar", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_runs_algorithm(tmp_path, capsys) -> None:
    path = tmp_path / "edges.txt"
    path.write_text("a b 1 1\n", encoding="utf-8")
    with patch("sys.argv", ["netstar", "bfs", str(path)]):
        runpy.run_module("netstar", run_name="__main__")
    assert "NONE" in capsys.readouterr().out
