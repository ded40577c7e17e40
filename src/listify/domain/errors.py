from __future__ import annotations

"""
Aggregation Error Model.

Defines the tagged error kinds raised by the aggregation engine. Fatal kinds
(INVALID_INPUT, FILE_READ, OUTPUT_WRITE) propagate to the host;
DIRECTORY_LIST is recovered locally by the tree renderer.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Tag carried by every aggregation failure."""
    INVALID_INPUT = "invalid_input"
    FILE_READ = "file_read"
    DIRECTORY_LIST = "directory_list"
    OUTPUT_WRITE = "output_write"


class AggregationError(Exception):
    """
    Base class for all aggregation failures.

    Attributes:
        kind: Error tag identifying the failure class.
        path: Filesystem path involved in the failure, if any.
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class InvalidInputError(AggregationError):
    """Root path is missing or is not a directory."""
    kind = ErrorKind.INVALID_INPUT


class FileReadError(AggregationError):
    """A file could not be opened or decoded during aggregation."""
    kind = ErrorKind.FILE_READ


class DirectoryListError(AggregationError):
    """The children of a directory could not be listed."""
    kind = ErrorKind.DIRECTORY_LIST


class OutputWriteError(AggregationError):
    """The output document could not be written or flushed after truncation."""
    kind = ErrorKind.OUTPUT_WRITE
