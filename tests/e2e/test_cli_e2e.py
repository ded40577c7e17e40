from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
module via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and the aggregated document on disk.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH to ensure the package
    is resolvable without being installed in site-packages.

    Args:
        args: List of command line arguments (excluding 'python -m listify.main').
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: The result object containing returncode, stdout, and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, "-m", "listify.main"] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a dummy project structure for E2E testing.

    Structure:
    /input
      /src
        main.py
      app.log
      README.md
    """
    input_dir = tmp_path / "input"
    input_dir.mkdir()

    src_dir = input_dir / "src"
    src_dir.mkdir()
    (src_dir / "main.py").write_text("def main(): pass\n", encoding="utf-8")

    (input_dir / "app.log").write_text("DEBUG noisy\nkept line\n", encoding="utf-8")
    (input_dir / "README.md").write_text("# Dummy Project\n", encoding="utf-8")

    return input_dir


def test_cli_happy_path_execution(sample_project: Path) -> None:
    """
    TC-01: Verify a standard execution writes listify.txt into the input dir (Exit Code 0).
    """
    result = run_cli(["-i", str(sample_project), "-f", "DEBUG", "--use-defaults"])

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert "Aggregation completed." in result.stdout

    output = sample_project / "listify.txt"
    assert output.exists(), "Output document was not created."

    text = output.read_text(encoding="utf-8")
    assert text.startswith("== DIRECTORY TREE ==\ninput\n")
    assert "kept line" in text
    assert "DEBUG noisy" not in text


def test_cli_handles_missing_input(tmp_path: Path) -> None:
    """
    TC-02: Verify CLI returns error code 2 when the input path is invalid.
    """
    missing_path = tmp_path / "non_existent_folder"

    result = run_cli(["-i", str(missing_path), "--use-defaults"])

    assert result.returncode == 2
    assert "Invalid path" in result.stderr
    assert not missing_path.exists()


def test_cli_dump_config(tmp_path: Path) -> None:
    """
    TC-03: Verify --dump-config prints the merged configuration and writes nothing.
    """
    result = run_cli(["-i", str(tmp_path), "-f", "#", "--no-tree", "--use-defaults", "--dump-config"])

    assert result.returncode == 0
    data: Dict[str, Any] = json.loads(result.stdout)
    assert data["prefix_filter"] == "#"
    assert data["filter_enabled"] is True
    assert data["include_tree"] is False
    assert os.listdir(tmp_path) == []


def test_cli_json_output_structure(tmp_path: Path, sample_project: Path) -> None:
    """
    TC-04: Verify structure and content of JSON output mode with an explicit output file.
    """
    target = tmp_path / "report.txt"

    result = run_cli(["-i", str(sample_project), "-o", str(target), "--use-defaults", "--json"])

    assert result.returncode == 0
    try:
        data: Dict[str, Any] = json.loads(result.stdout)
    except json.JSONDecodeError:
        pytest.fail(f"Failed to decode JSON output: {result.stdout}")

    assert data["ok"] is True
    assert data["state"] == "completed"
    assert data["output_path"] == str(target)
    assert len(data["files_aggregated"]) == 3
    assert target.exists()
    assert not (sample_project / "listify.txt").exists()
