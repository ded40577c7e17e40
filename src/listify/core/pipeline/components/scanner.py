from __future__ import annotations

"""
File Discovery Component.

Lists directories for the tree renderer and builds the traversal result for
the content aggregator as three observable stages:

    enumerate_files -> canonicalize_unique -> sort_canonical

The composed ``collect_files`` never yields the output document and never
yields the same canonical path twice.
"""

import logging
import os
from typing import Dict, Iterable, Iterator, List, Optional, Set

from listify.domain.aggregation_models import DirectoryEntry, EntryKind
from listify.domain.errors import DirectoryListError
from listify.infra.fs import canonical_path

logger = logging.getLogger(__name__)


# ==============================================================================
# DIRECTORY LISTING
# ==============================================================================

def list_directory(dir_path: str) -> List[DirectoryEntry]:
    """
    List the immediate children of a directory, unsorted.

    Symlinks are classified by their target; anything that is not a
    directory (including dangling links) is tagged FILE.

    Raises:
        DirectoryListError: If the directory cannot be read.
    """
    entries: List[DirectoryEntry] = []
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                entries.append(DirectoryEntry(
                    name=entry.name,
                    path=entry.path,
                    canonical_path=canonical_path(entry.path),
                    kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
                ))
    except OSError as e:
        raise DirectoryListError(
            f"Cannot list directory {dir_path}: {e.strerror or e}", path=dir_path
        ) from e
    return entries


def sort_entries(entries: Iterable[DirectoryEntry]) -> List[DirectoryEntry]:
    """
    Order entries directories-first, then by case-insensitive name, with the
    original name as tie-breaker.
    """
    return sorted(entries, key=lambda e: (not e.is_dir, e.name.lower(), e.name))


# ==============================================================================
# TRAVERSAL PIPELINE
# ==============================================================================

def enumerate_files(root: str) -> Iterator[str]:
    """
    Stage 1: yield the path of every regular file below ``root``.

    Directory symlinks are followed, but a directory whose canonical path was
    already walked is not descended into again.
    """
    visited: Set[str] = set()

    def _on_walk_error(err: OSError) -> None:
        logger.warning(f"Skipping unreadable directory during scan: {err.filename} ({err.strerror})")

    for dir_path, dirs, files in os.walk(root, onerror=_on_walk_error, followlinks=True):
        visited.add(canonical_path(dir_path))
        dirs[:] = [d for d in dirs if canonical_path(os.path.join(dir_path, d)) not in visited]

        for file_name in files:
            file_path = os.path.join(dir_path, file_name)
            if os.path.isfile(file_path):
                yield file_path


def canonicalize_unique(
        paths: Iterable[str],
        exclude_path: Optional[str] = None,
        header_paths: Optional[Dict[str, str]] = None,
) -> List[str]:
    """
    Stage 2: map paths to canonical form, drop ``exclude_path`` and keep only
    the first occurrence of each canonical path.

    If ``header_paths`` is given it is filled with the unresolved absolute
    path to show for each canonical path: the canonical path itself when the
    file was reached at its real location, otherwise the smallest alias.
    """
    excluded = canonical_path(exclude_path) if exclude_path else None
    seen: Set[str] = set()
    unique: List[str] = []

    for path in paths:
        canon = canonical_path(path)
        if canon == excluded:
            logger.debug(f"Excluding output document from traversal: {path}")
            continue
        if header_paths is not None:
            header_paths[canon] = _preferred_alias(header_paths.get(canon), os.path.abspath(path), canon)
        if canon in seen:
            logger.debug(f"Duplicate alias ignored: {path} -> {canon}")
            continue
        seen.add(canon)
        unique.append(canon)

    return unique


def _preferred_alias(current: Optional[str], candidate: str, canon: str) -> str:
    if current is None:
        return candidate
    if canon in (current, candidate):
        return canon
    return min(current, candidate)


def sort_canonical(paths: Iterable[str]) -> List[str]:
    """Stage 3: lexicographic order by canonical absolute path string."""
    return sorted(paths)


def collect_files(
        root: str,
        exclude_path: Optional[str] = None,
        header_paths: Optional[Dict[str, str]] = None,
) -> List[str]:
    """
    Build the traversal result for ``root``.

    Args:
        root: Directory to scan.
        exclude_path: Output document to leave out (compared canonically).
        header_paths: Optional mapping filled with the display path of each
            canonical path (see ``canonicalize_unique``).

    Returns:
        List[str]: Deduplicated, sorted canonical file paths.
    """
    unique = canonicalize_unique(enumerate_files(root), exclude_path, header_paths)
    return sort_canonical(unique)
