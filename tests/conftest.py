from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for sample directory trees and configuration state.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """
    Create the reference tree used across tests.

    Structure:
    /root
      /sub
        b.txt
      a.txt
    """
    root = tmp_path / "root"
    sub = root / "sub"
    sub.mkdir(parents=True)
    (root / "a.txt").write_text("alpha\n", encoding="utf-8")
    (sub / "b.txt").write_text("beta\n", encoding="utf-8")
    return root


@pytest.fixture
def user_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect persistent configuration into a temporary directory."""
    data_dir = tmp_path / "user_data"
    data_dir.mkdir()
    monkeypatch.setattr("listify.domain.config.get_user_data_dir", lambda: str(data_dir))
    return data_dir


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """Return a valid, complete session configuration."""
    return {
        "input_path": "/tmp/test_input",
        "prefix_filter": "DEBUG,INFO",
        "filter_enabled": True,
        "include_tree": True,
        "output_file_name": "listify.txt",
    }


@pytest.fixture
def make_symlink() -> Callable[..., None]:
    """Return a symlink factory that skips the calling test where the OS refuses."""
    def _make(target: Path, link: Path, target_is_directory: bool = False) -> None:
        try:
            os.symlink(target, link, target_is_directory=target_is_directory)
        except (OSError, NotImplementedError) as e:
            pytest.skip(f"Symlinks not supported here: {e}")
    return _make
