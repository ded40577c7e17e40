from __future__ import annotations

"""
Core aggregation engine.

Coordinates a single aggregation run:
1. Validates the root directory and the output location.
2. Truncates (or creates) the output document.
3. Renders the directory tree section.
4. Collects, filters and appends every file to the content section.

All failures are terminal for the run; nothing is retried.
"""

import logging
import os
from typing import Callable, Dict, List, Optional

from listify.core.analysis.tree_renderer import render_tree
from listify.core.pipeline.components.filters import parse_prefix_filter, render_content
from listify.core.pipeline.components.reader import read_lines
from listify.core.pipeline.components.scanner import collect_files
from listify.core.pipeline.components.writer import OutputDocument
from listify.domain.aggregation_models import (
    AggregationResult,
    PrefixFilter,
    RunState,
    create_error_result,
    create_success_result,
)
from listify.domain.constants import DEFAULT_OUTPUT_FILE_NAME
from listify.domain.errors import (
    AggregationError,
    DirectoryListError,
    InvalidInputError,
    OutputWriteError,
)
from listify.infra.fs import normalize_path

logger = logging.getLogger(__name__)

StateListener = Callable[[RunState], None]


class AggregationRun:
    """
    One execution of the aggregation state machine.

    NOT_STARTED -> VALIDATING -> TRUNCATING -> RENDERING_TREE
        -> AGGREGATING_CONTENT -> COMPLETED, with FAILED reachable from
    VALIDATING (invalid input), AGGREGATING_CONTENT (file read) and any phase
    writing the document (output write).
    """

    def __init__(
            self,
            root: str,
            prefix_filter_spec: Optional[str] = "",
            *,
            output_path: Optional[str] = None,
            include_tree: bool = True,
            on_state: Optional[StateListener] = None,
    ) -> None:
        self.raw_root = root
        self.prefix_filter: PrefixFilter = parse_prefix_filter(prefix_filter_spec)
        self.raw_output_path = output_path
        self.include_tree = include_tree
        self._on_state = on_state

        self.state = RunState.NOT_STARTED
        self.root_path = ""
        self.output_path = ""
        self.tree_lines: List[str] = []
        self.files_aggregated: List[str] = []
        self.list_errors: List[DirectoryListError] = []

    # -------------------------------------------------------------------------
    # EXECUTION
    # -------------------------------------------------------------------------

    def execute(self) -> str:
        """
        Run every phase and return the absolute output path.

        Raises:
            InvalidInputError: Root or output location unusable (no writes).
            FileReadError: A file could not be read; the partially written
                output document is left on disk.
            OutputWriteError: The output document could not be written
                after truncation.
        """
        try:
            self._transition(RunState.VALIDATING)
            self._validate()

            self._transition(RunState.TRUNCATING)
            with self._open_document() as doc:
                self._transition(RunState.RENDERING_TREE)
                if self.include_tree:
                    self.tree_lines = render_tree(
                        self.root_path, self.output_path, list_errors=self.list_errors
                    )
                    doc.write_tree_section(self.tree_lines)

                self._transition(RunState.AGGREGATING_CONTENT)
                doc.begin_content_section()
                header_paths: Dict[str, str] = {}
                for file_path in collect_files(self.root_path, self.output_path, header_paths):
                    content = render_content(read_lines(file_path), self.prefix_filter)
                    doc.append_entry(header_paths.get(file_path, file_path), content)
                    self.files_aggregated.append(file_path)

        except AggregationError as e:
            self._fail(e)
            raise
        except OSError as e:
            err = OutputWriteError(
                f"Error writing output file {self.output_path}: {e.strerror or e}",
                path=self.output_path,
            )
            self._fail(err)
            raise err from e

        self._transition(RunState.COMPLETED)
        logger.info(
            f"Aggregated {len(self.files_aggregated)} file(s) from {self.root_path} "
            f"into {self.output_path}"
        )
        return self.output_path

    # -------------------------------------------------------------------------
    # PHASES
    # -------------------------------------------------------------------------

    def _validate(self) -> None:
        if not (self.raw_root or "").strip():
            raise InvalidInputError("Base path cannot be empty", path=self.raw_root)

        self.root_path = normalize_path(self.raw_root)
        if not os.path.isdir(self.root_path):
            raise InvalidInputError(
                f"The path {self.root_path} is not a valid directory", path=self.root_path
            )

        if self.raw_output_path:
            self.output_path = normalize_path(self.raw_output_path)
        else:
            self.output_path = os.path.join(self.root_path, DEFAULT_OUTPUT_FILE_NAME)

        if os.path.isdir(self.output_path):
            raise InvalidInputError(
                f"The output path {self.output_path} is a directory", path=self.output_path
            )
        if not os.path.isdir(os.path.dirname(self.output_path)):
            raise InvalidInputError(
                f"The output directory for {self.output_path} does not exist",
                path=self.output_path,
            )

        logger.debug(
            f"Validated run: root={self.root_path} output={self.output_path} "
            f"prefixes={list(self.prefix_filter.prefixes)}"
        )

    def _open_document(self) -> OutputDocument:
        doc = OutputDocument(self.output_path)
        try:
            return doc.open()
        except OSError as e:
            raise InvalidInputError(
                f"Cannot open output file {self.output_path}: {e.strerror or e}",
                path=self.output_path,
            ) from e

    def _fail(self, error: AggregationError) -> None:
        self._transition(RunState.FAILED)
        logger.error(f"Aggregation failed ({error.kind.value}): {error}")

    def _transition(self, state: RunState) -> None:
        logger.debug(f"Aggregation state: {self.state.value} -> {state.value}")
        self.state = state
        if self._on_state:
            self._on_state(state)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def aggregate(
        root: str,
        prefix_filter_spec: Optional[str] = "",
        *,
        output_path: Optional[str] = None,
        include_tree: bool = True,
) -> str:
    """
    Aggregate the text of every file below ``root`` into one document.

    Args:
        root: Directory to aggregate.
        prefix_filter_spec: Comma-separated line prefixes to drop (may be empty).
        output_path: Output location; defaults to ``<root>/listify.txt``.
        include_tree: Write the directory tree section first.

    Returns:
        str: Absolute path of the output document.

    Raises:
        InvalidInputError, FileReadError, OutputWriteError: See
            ``AggregationRun.execute``.
    """
    return AggregationRun(
        root,
        prefix_filter_spec,
        output_path=output_path,
        include_tree=include_tree,
    ).execute()


def run_aggregation(
        root: str,
        prefix_filter_spec: Optional[str] = "",
        *,
        output_path: Optional[str] = None,
        include_tree: bool = True,
        on_state: Optional[StateListener] = None,
) -> AggregationResult:
    """
    Execute an aggregation and report the outcome as a tagged result instead
    of raising. Used by the CLI and GUI adapters.
    """
    logger.info(f"Aggregation started for: {root}")
    run = AggregationRun(
        root,
        prefix_filter_spec,
        output_path=output_path,
        include_tree=include_tree,
        on_state=on_state,
    )
    try:
        out = run.execute()
    except AggregationError as e:
        return create_error_result(
            e, run.root_path or root, run.output_path, run.files_aggregated
        )

    return create_success_result(
        run.root_path,
        out,
        run.prefix_filter,
        run.files_aggregated,
        run.tree_lines,
    )
