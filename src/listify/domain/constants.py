from __future__ import annotations

"""
Domain Constants.

Centralizes the output document format (section headings, per-file framing,
tree connectors) and application-wide identifiers shared by the core engine
and the interface adapters.
"""

CURRENT_CONFIG_VERSION = "1.0.0"
APP_NAME = "Listify"

# -----------------------------------------------------------------------------
# OUTPUT DOCUMENT FORMAT
# -----------------------------------------------------------------------------

DEFAULT_OUTPUT_FILE_NAME = "listify.txt"

TREE_SECTION_HEADER = "== DIRECTORY TREE =="
CONTENT_SECTION_HEADER = "== FILE CONTENTS =="

FILE_HEADER_TEMPLATE = "=== File: {path} ==="

# Written after each file's content (which already ends with a newline)
FILE_FOOTER = "\n\n\n"

PREFIX_SEPARATOR = ","

# -----------------------------------------------------------------------------
# TREE CONNECTORS
# -----------------------------------------------------------------------------

BRANCH = "├── "
CORNER = "└── "
PIPE = "│   "
SPACE = "    "
