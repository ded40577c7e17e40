from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and canonicalization utilities.
Acts as an abstraction over the 'os' module so that identity comparisons
(output self-exclusion, alias deduplication) behave uniformly across
Windows and Unix-like systems.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Listify"
UNIX_APP_DIR_NAME = ".listify"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/Listify
    - Linux/Mac: ~/.listify

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str = "") -> str:
    """
    Normalize a raw user path into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path (symlinks are NOT resolved).
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def canonical_path(path: str) -> str:
    """
    Return the canonical form of a path: absolute, normalized and
    symlink-resolved. Two paths denote the same file iff their canonical
    forms are equal.
    """
    return os.path.realpath(os.path.abspath(path))


def display_name(path: str) -> str:
    """Name used for a directory in rendered output ('/' for the root)."""
    name = os.path.basename(os.path.normpath(path))
    return name or os.path.normpath(path)
