from __future__ import annotations

"""
Aggregation Domain Data Models.

Defines the transient structures produced during a single aggregation run
(directory entries, the prefix filter, the run state machine) and the
tagged result object handed back to the interface layers (CLI/GUI).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from listify.domain.errors import AggregationError, ErrorKind

# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class DirectoryEntry:
    """
    A filesystem entry discovered while listing a directory.

    Attributes:
        name: Entry name as listed by the filesystem.
        path: Absolute (non-resolved) path of the entry.
        canonical_path: Symlink-resolved absolute path used for identity.
        kind: FILE or DIRECTORY.
    """
    name: str
    path: str
    canonical_path: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class PrefixFilter:
    """
    Ordered, duplicate-free set of line prefixes.

    A line is filtered out when its leading-whitespace-stripped form starts
    with any member. An empty filter keeps every line.
    """
    prefixes: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.prefixes

    def matches(self, line: str) -> bool:
        stripped = line.lstrip()
        return any(stripped.startswith(p) for p in self.prefixes)

# -----------------------------------------------------------------------------
# RUN STATE MACHINE
# -----------------------------------------------------------------------------

class RunState(str, Enum):
    NOT_STARTED = "not_started"
    VALIDATING = "validating"
    TRUNCATING = "truncating"
    RENDERING_TREE = "rendering_tree"
    AGGREGATING_CONTENT = "aggregating_content"
    COMPLETED = "completed"
    FAILED = "failed"

# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class AggregationResult:
    """
    Tagged outcome of an aggregation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: Failure tag (INVALID_INPUT / FILE_READ / OUTPUT_WRITE) or None.
        error_path: Path that caused the failure, if known.
        root_path: Directory that was requested for aggregation.
        output_path: Absolute path of the output document.
        state: Final state reached by the run.
        prefixes: Prefixes applied during filtering.
        files_aggregated: Canonical paths written to the content section.
        tree_lines: Rendered tree lines (empty when the tree is disabled).
    """
    ok: bool
    error: str
    root_path: str
    output_path: str
    state: RunState
    error_kind: Optional[ErrorKind] = None
    error_path: Optional[str] = None
    prefixes: List[str] = field(default_factory=list)
    files_aggregated: List[str] = field(default_factory=list)
    tree_lines: List[str] = field(default_factory=list)


def create_error_result(
        exc: AggregationError,
        root_path: str,
        output_path: str = "",
        files_aggregated: Optional[List[str]] = None,
) -> AggregationResult:
    """Build a failed result from a fatal aggregation error."""
    return AggregationResult(
        ok=False,
        error=str(exc),
        error_kind=exc.kind,
        error_path=exc.path,
        root_path=root_path,
        output_path=output_path,
        state=RunState.FAILED,
        files_aggregated=files_aggregated or [],
    )


def create_success_result(
        root_path: str,
        output_path: str,
        prefix_filter: PrefixFilter,
        files_aggregated: List[str],
        tree_lines: Optional[List[str]] = None,
) -> AggregationResult:
    """Build a completed result."""
    return AggregationResult(
        ok=True,
        error="",
        root_path=root_path,
        output_path=output_path,
        state=RunState.COMPLETED,
        prefixes=list(prefix_filter.prefixes),
        files_aggregated=list(files_aggregated),
        tree_lines=tree_lines or [],
    )
