from __future__ import annotations

"""
Logging Settings.

Holds the knobs the CLI and GUI pass to ``configure_logging`` and the record
formats shared by every handler.
"""

import logging
from dataclasses import dataclass
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: Optional[str]) -> int:
    """Map a level name such as "debug" or "WARN" to its number (INFO if unknown)."""
    value = logging.getLevelName(str(name or "").strip().upper())
    return value if isinstance(value, int) else logging.INFO


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one ``configure_logging`` call.

    The CLI sets ``level`` from ``--debug``; the GUI adds ``log_file`` so
    sessions leave a rotating trace in the user data directory.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None
    max_bytes: int = 1024 * 1024
    backup_count: int = 3

    @property
    def level_no(self) -> int:
        return resolve_level(self.level)
