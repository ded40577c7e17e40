from __future__ import annotations

"""
Output Document Writer.

Owns the single output file of an aggregation run. The file is truncated
when the document is opened, then written sequentially in two phases (tree
section, content section) through the same handle, which is closed on every
exit path by the context manager protocol.
"""

import logging
from typing import IO, List, Optional

from listify.domain.constants import (
    CONTENT_SECTION_HEADER,
    FILE_FOOTER,
    FILE_HEADER_TEMPLATE,
    TREE_SECTION_HEADER,
)

logger = logging.getLogger(__name__)


class OutputDocument:
    """
    Exclusive writable handle on the aggregated output file.

    Usage:
        with OutputDocument(path) as doc:
            doc.write_tree_section(lines)
            doc.begin_content_section()
            doc.append_entry(file_path, content)
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._handle: Optional[IO[str]] = None

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def open(self) -> "OutputDocument":
        """
        Create or truncate the output file.

        Newlines are written verbatim so the document is byte-identical
        across platforms.
        """
        self._handle = open(self.path, "w", encoding="utf-8", newline="\n")
        logger.debug(f"Output document truncated: {self.path}")
        return self

    def close(self) -> None:
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.close()

    def __enter__(self) -> "OutputDocument":
        if self._handle is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # SECTIONS
    # -------------------------------------------------------------------------

    def write_tree_section(self, tree_lines: List[str]) -> None:
        """Write the tree heading, the tree lines and a separating blank line."""
        out = self._require_open()
        out.write(f"{TREE_SECTION_HEADER}\n")
        for line in tree_lines:
            out.write(f"{line}\n")
        out.write("\n")

    def begin_content_section(self) -> None:
        self._require_open().write(f"{CONTENT_SECTION_HEADER}\n")

    def append_entry(self, file_path: str, content: str) -> None:
        """
        Append one framed file block.

        Format:
            === File: <file_path> ===
            <content, ending with a newline>
            <three blank lines>
        """
        out = self._require_open()
        out.write(FILE_HEADER_TEMPLATE.format(path=file_path) + "\n")
        out.write(content)
        out.write(FILE_FOOTER)

    def _require_open(self) -> IO[str]:
        if self._handle is None:
            raise ValueError(f"Output document is not open: {self.path}")
        return self._handle
