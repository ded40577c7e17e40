from __future__ import annotations

"""
Background Worker Threads for GUI Operations.

Keeps the window responsive by running the aggregation on a daemon thread and
handing the outcome back through a callback.
"""

import logging
from typing import Any, Callable, Optional

from listify.core.pipeline.engine import run_aggregation

logger = logging.getLogger(__name__)


def run_aggregation_task(
        root: str,
        prefix_filter_spec: str,
        include_tree: bool,
        on_complete: Callable[[Any], None],
        output_path: Optional[str] = None,
) -> None:
    """
    Execute one aggregation run and report its result.

    ``on_complete`` receives the AggregationResult, or the exception instance
    if the run crashed outside the tagged error model.

    Args:
        root: Directory to aggregate.
        prefix_filter_spec: Raw comma-separated prefix list.
        include_tree: Whether to write the tree section.
        on_complete: Callback used to marshal the outcome back to the GUI.
        output_path: Optional explicit output location.
    """
    try:
        result = run_aggregation(
            root,
            prefix_filter_spec,
            output_path=output_path,
            include_tree=include_tree,
        )
    except Exception as e:
        logger.critical(f"Aggregation Thread: Critical failure detected: {e}", exc_info=True)
        on_complete(e)
        return

    on_complete(result)
