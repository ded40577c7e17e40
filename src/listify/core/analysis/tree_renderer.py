from __future__ import annotations

"""
Tree Renderer.

Walks a directory recursively and converts it into an ASCII tree using the
standard connectors (├──, └──). Only filesystem metadata is consulted; file
contents are never read.
"""

import logging
from typing import List, Optional, Set

from listify.core.pipeline.components.scanner import list_directory, sort_entries
from listify.domain.constants import BRANCH, CORNER, PIPE, SPACE
from listify.domain.errors import DirectoryListError
from listify.infra.fs import canonical_path, display_name

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(
        root: str,
        exclude_path: Optional[str] = None,
        list_errors: Optional[List[DirectoryListError]] = None,
) -> List[str]:
    """
    Render the directory tree rooted at ``root``.

    The root's own name comes first, unprefixed. Directories are listed before
    files and each directory is expanded right after its own line.

    A directory that cannot be listed is rendered without children; the
    swallowed error is logged and, if ``list_errors`` is given, appended to it.

    Args:
        root: Directory to render.
        exclude_path: Entry to omit (compared by canonical path), usually the
            output document.
        list_errors: Optional accumulator for recovered listing failures.

    Returns:
        List[str]: Tree lines without trailing newlines.
    """
    excluded = canonical_path(exclude_path) if exclude_path else None
    lines: List[str] = [display_name(root)]

    render_tree_structure(
        root,
        lines,
        prefix="",
        excluded=excluded,
        ancestors={canonical_path(root)},
        list_errors=list_errors,
    )
    return lines


def render_tree_structure(
        dir_path: str,
        lines: List[str],
        prefix: str,
        excluded: Optional[str],
        ancestors: Set[str],
        list_errors: Optional[List[DirectoryListError]] = None,
) -> None:
    """
    Append the children of ``dir_path`` to ``lines``.

    Args:
        dir_path: Directory whose children are rendered.
        lines: Accumulator for output strings.
        prefix: Indentation inherited from the ancestors' last-sibling flags.
        excluded: Canonical path to skip.
        ancestors: Canonical paths of the directories above this one; a
            symlinked child resolving to one of them is not expanded.
        list_errors: Optional accumulator for recovered listing failures.
    """
    try:
        children = list_directory(dir_path)
    except DirectoryListError as e:
        logger.warning(f"Tree: {e}. Rendering it as empty.")
        if list_errors is not None:
            list_errors.append(e)
        return

    entries = sort_entries(c for c in children if c.canonical_path != excluded)
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        lines.append(f"{prefix}{CORNER if is_last else BRANCH}{entry.name}")

        if not entry.is_dir:
            continue

        if entry.canonical_path in ancestors:
            logger.debug(f"Tree: not expanding {entry.path}, it links back to an ancestor.")
            continue

        render_tree_structure(
            entry.path,
            lines,
            prefix=prefix + (SPACE if is_last else PIPE),
            excluded=excluded,
            ancestors=ancestors | {entry.canonical_path},
            list_errors=list_errors,
        )
