from __future__ import annotations

"""
Integration tests for the aggregation engine.

Runs complete aggregations against real temporary trees and checks the
document format, determinism, self-exclusion, alias deduplication and the
failure semantics of the run state machine.
"""

import os
from pathlib import Path

import pytest

from listify.core.pipeline.components import reader
from listify.core.pipeline.components.writer import OutputDocument
from listify.core.pipeline.engine import aggregate, run_aggregation
from listify.domain.aggregation_models import RunState
from listify.domain.errors import ErrorKind, FileReadError, InvalidInputError, OutputWriteError


def _real(p: Path) -> str:
    return os.path.realpath(p)


def _headers(text: str):
    return [line for line in text.splitlines() if line.startswith("=== File: ")]


# -----------------------------------------------------------------------------
# OUTPUT FORMAT
# -----------------------------------------------------------------------------

def test_aggregate_produces_exact_document(sample_tree):
    out = aggregate(str(sample_tree), "")

    assert out == str(sample_tree / "listify.txt")
    assert Path(out).read_bytes().decode("utf-8") == (
        "== DIRECTORY TREE ==\n"
        "root\n"
        "├── sub\n"
        "│   └── b.txt\n"
        "└── a.txt\n"
        "\n"
        "== FILE CONTENTS ==\n"
        f"=== File: {_real(sample_tree / 'a.txt')} ===\n"
        "alpha\n"
        "\n\n\n"
        f"=== File: {_real(sample_tree / 'sub' / 'b.txt')} ===\n"
        "beta\n"
        "\n\n\n"
    )


def test_aggregate_without_tree_section(sample_tree):
    out = aggregate(str(sample_tree), "", include_tree=False)
    text = Path(out).read_text(encoding="utf-8")

    assert text.startswith("== FILE CONTENTS ==\n=== File: ")
    assert "== DIRECTORY TREE ==" not in text


def test_prefix_filter_and_leading_blank_trim_applied_per_file(tmp_path):
    root = tmp_path / "logs"
    root.mkdir()
    (root / "app.log").write_text(
        "DEBUG: boot\n\n  INFO: ready\nkeep 1\n\nkeep 2\n", encoding="utf-8"
    )

    out = aggregate(str(root), "DEBUG, INFO")
    text = Path(out).read_text(encoding="utf-8")

    assert f"=== File: {_real(root / 'app.log')} ===\nkeep 1\n\nkeep 2\n\n\n\n" in text
    assert "DEBUG" not in text.split("== FILE CONTENTS ==")[1]


def test_empty_and_blank_filter_specs_give_identical_output(sample_tree):
    (sample_tree / "a.txt").write_text("\n\nDEBUG x\n", encoding="utf-8")

    first = Path(aggregate(str(sample_tree), "")).read_bytes()
    second = Path(aggregate(str(sample_tree), " ,  , ")).read_bytes()

    assert first == second
    assert b"DEBUG x\n" in first

# -----------------------------------------------------------------------------
# INVARIANTS
# -----------------------------------------------------------------------------

def test_rerun_is_byte_identical(sample_tree):
    (sample_tree / "Upper.md").write_text("# title\n", encoding="utf-8")
    (sample_tree / "sub" / "deeper").mkdir()
    (sample_tree / "sub" / "deeper" / "c.py").write_text("print(1)\n", encoding="utf-8")

    first = Path(aggregate(str(sample_tree), "#")).read_bytes()
    second = Path(aggregate(str(sample_tree), "#")).read_bytes()

    assert first == second


def test_output_never_lists_itself(sample_tree):
    collider = sample_tree / "notes.txt"
    collider.write_text("OLD CONTENT\n", encoding="utf-8")

    out = aggregate(str(sample_tree), "", output_path=str(collider))
    text = Path(out).read_text(encoding="utf-8")

    assert all("notes.txt" not in h for h in _headers(text))
    assert "notes.txt" not in text
    assert "OLD CONTENT" not in text


def test_output_excluded_when_given_through_alias(sample_tree):
    alias = os.path.join(str(sample_tree), "sub", "..", "listify.txt")

    out = aggregate(str(sample_tree), "", output_path=alias)
    text = Path(out).read_text(encoding="utf-8")

    assert len(_headers(text)) == 2
    assert "listify.txt" not in text


def test_output_outside_root(sample_tree, tmp_path):
    target = tmp_path / "report.txt"

    out = aggregate(str(sample_tree), "", output_path=str(target))

    assert out == str(target)
    assert not (sample_tree / "listify.txt").exists()
    assert len(_headers(target.read_text(encoding="utf-8"))) == 2


def test_symlinked_alias_aggregated_once(sample_tree, make_symlink):
    make_symlink(sample_tree / "sub" / "b.txt", sample_tree / "b_link.txt")
    make_symlink(sample_tree / "sub", sample_tree / "sub_link", target_is_directory=True)

    text = Path(aggregate(str(sample_tree), "")).read_text(encoding="utf-8")

    assert _headers(text) == [
        f"=== File: {_real(sample_tree / 'a.txt')} ===",
        f"=== File: {_real(sample_tree / 'sub' / 'b.txt')} ===",
    ]

# -----------------------------------------------------------------------------
# FAILURES
# -----------------------------------------------------------------------------

def test_missing_root_fails_without_writing(tmp_path):
    with pytest.raises(InvalidInputError) as exc_info:
        aggregate(str(tmp_path / "missing"), "DEBUG")

    assert exc_info.value.kind is ErrorKind.INVALID_INPUT
    assert os.listdir(tmp_path) == []


def test_file_root_fails_and_is_untouched(tmp_path):
    f = tmp_path / "plain.txt"
    f.write_text("data", encoding="utf-8")

    with pytest.raises(InvalidInputError):
        aggregate(str(f), "")

    assert f.read_text(encoding="utf-8") == "data"
    assert os.listdir(tmp_path) == ["plain.txt"]


def test_blank_root_is_invalid():
    with pytest.raises(InvalidInputError):
        aggregate("   ", "")


def test_output_in_missing_directory_is_invalid(sample_tree, tmp_path):
    with pytest.raises(InvalidInputError):
        aggregate(str(sample_tree), "", output_path=str(tmp_path / "nope" / "out.txt"))


def test_unreadable_file_aborts_and_stops_output(tmp_path, monkeypatch):
    root = tmp_path / "r"
    root.mkdir()
    for name in ("a.txt", "b.txt", "c.txt"):
        (root / name).write_text(f"content {name}\n", encoding="utf-8")

    real_stream = reader.stream_file_content

    def flaky_stream(path):
        if path.endswith("b.txt"):
            raise PermissionError(13, "Permission denied", path)
        return real_stream(path)

    monkeypatch.setattr(reader, "stream_file_content", flaky_stream)

    with pytest.raises(FileReadError) as exc_info:
        aggregate(str(root), "")

    assert exc_info.value.path.endswith("b.txt")

    text = (root / "listify.txt").read_text(encoding="utf-8")
    assert "content a.txt" in text
    assert "b.txt ===" not in text
    assert "content c.txt" not in text


def test_output_write_failure_is_tagged(sample_tree, monkeypatch):
    def disk_full(self, file_path, content):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(OutputDocument, "append_entry", disk_full)

    with pytest.raises(OutputWriteError) as exc_info:
        aggregate(str(sample_tree), "")

    assert exc_info.value.kind is ErrorKind.OUTPUT_WRITE
    assert exc_info.value.path == str(sample_tree / "listify.txt")
    assert "No space left on device" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_run_aggregation_reports_output_write_failure(sample_tree, monkeypatch):
    def disk_full(self, file_path, content):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(OutputDocument, "append_entry", disk_full)
    states = []

    result = run_aggregation(str(sample_tree), "", on_state=states.append)

    assert not result.ok
    assert result.error_kind is ErrorKind.OUTPUT_WRITE
    assert result.state is RunState.FAILED
    assert result.files_aggregated == []
    assert states == [
        RunState.VALIDATING,
        RunState.TRUNCATING,
        RunState.RENDERING_TREE,
        RunState.AGGREGATING_CONTENT,
        RunState.FAILED,
    ]

# -----------------------------------------------------------------------------
# HEADER PATHS
# -----------------------------------------------------------------------------

def test_headers_keep_symlinked_root_as_given(sample_tree, tmp_path, make_symlink):
    alias_root = tmp_path / "alias_root"
    make_symlink(sample_tree, alias_root, target_is_directory=True)

    result = run_aggregation(str(alias_root), "")
    text = Path(result.output_path).read_text(encoding="utf-8")

    assert result.ok
    assert _headers(text) == [
        f"=== File: {alias_root / 'a.txt'} ===",
        f"=== File: {alias_root / 'sub' / 'b.txt'} ===",
    ]
    assert result.files_aggregated == [
        _real(sample_tree / "a.txt"),
        _real(sample_tree / "sub" / "b.txt"),
    ]

# -----------------------------------------------------------------------------
# TAGGED RESULT WRAPPER
# -----------------------------------------------------------------------------

def test_run_aggregation_success_result_and_states(sample_tree):
    states = []

    result = run_aggregation(str(sample_tree), "DEBUG,,INFO", on_state=states.append)

    assert result.ok
    assert result.state is RunState.COMPLETED
    assert result.prefixes == ["DEBUG", "INFO"]
    assert result.files_aggregated == [
        _real(sample_tree / "a.txt"),
        _real(sample_tree / "sub" / "b.txt"),
    ]
    assert result.tree_lines[0] == "root"
    assert states == [
        RunState.VALIDATING,
        RunState.TRUNCATING,
        RunState.RENDERING_TREE,
        RunState.AGGREGATING_CONTENT,
        RunState.COMPLETED,
    ]


def test_run_aggregation_invalid_input_result(tmp_path):
    states = []

    result = run_aggregation(str(tmp_path / "missing"), "", on_state=states.append)

    assert not result.ok
    assert result.error_kind is ErrorKind.INVALID_INPUT
    assert result.state is RunState.FAILED
    assert states == [RunState.VALIDATING, RunState.FAILED]
