from __future__ import annotations

"""
File Reading Component.

Streams text files line by line as UTF-8. Undecodable byte sequences are
replaced rather than raised, so only genuine I/O failures (permission denial,
a file deleted mid-traversal) abort an aggregation run.
"""

from typing import Iterator, List

from listify.domain.errors import FileReadError

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def stream_file_content(file_path: str) -> Iterator[str]:
    """
    Generate a line-by-line stream of file content.

    Line terminators (\\n, \\r\\n, \\r) are stripped from each yielded line.

    Args:
        file_path: Absolute path to the target file.

    Yields:
        str: Lines without their terminator.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            yield line[:-1] if line.endswith("\n") else line


def read_lines(file_path: str) -> List[str]:
    """
    Read a whole file into a list of lines.

    Raises:
        FileReadError: Wrapping the underlying OSError, tagged with the path.
    """
    try:
        return list(stream_file_content(file_path))
    except OSError as e:
        raise FileReadError(
            f"Error reading file {file_path}: {e.strerror or e}", path=file_path
        ) from e
