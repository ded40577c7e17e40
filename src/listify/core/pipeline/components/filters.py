from __future__ import annotations

"""
Line Filtering Component.

Parses the user-supplied prefix specification and applies the per-file line
transformations: prefix-based line removal followed by trimming of leading
blank lines.
"""

from typing import Iterable, List, Optional

from listify.domain.aggregation_models import PrefixFilter
from listify.domain.constants import PREFIX_SEPARATOR

# -----------------------------------------------------------------------------
# PREFIX SPECIFICATION
# -----------------------------------------------------------------------------

def parse_prefix_filter(spec: Optional[str]) -> PrefixFilter:
    """
    Convert a comma-separated string into a PrefixFilter.

    Tokens are trimmed, empty tokens are discarded and duplicates are removed
    keeping the first occurrence, so the result is deterministic.

    Args:
        spec: Raw specification (e.g. "DEBUG, INFO"). None means no filter.

    Returns:
        PrefixFilter: Parsed filter; empty when the spec holds no tokens.
    """
    if not spec:
        return PrefixFilter()

    seen: List[str] = []
    for token in spec.split(PREFIX_SEPARATOR):
        token = token.strip()
        if token and token not in seen:
            seen.append(token)
    return PrefixFilter(tuple(seen))

# -----------------------------------------------------------------------------
# LINE TRANSFORMATIONS
# -----------------------------------------------------------------------------

def filter_lines(lines: Iterable[str], prefix_filter: PrefixFilter) -> List[str]:
    """Drop every line matching one of the filter's prefixes."""
    if prefix_filter.is_empty:
        return list(lines)
    return [line for line in lines if not prefix_filter.matches(line)]


def drop_leading_blank_lines(lines: List[str]) -> List[str]:
    """
    Remove whitespace-only lines from the front of the sequence.

    Interior and trailing blank lines are preserved.
    """
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    return lines[start:]


def render_content(lines: Iterable[str], prefix_filter: PrefixFilter) -> str:
    """
    Produce the text block written for one file.

    Returns:
        str: Filtered lines joined with newlines, with exactly one trailing
        newline ("\\n" alone when nothing survives).
    """
    kept = drop_leading_blank_lines(filter_lines(lines, prefix_filter))
    return "\n".join(kept) + "\n"
