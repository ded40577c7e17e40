from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the domain layer.
"""

import argparse
from typing import Any, Dict

from listify.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the listify CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="listify",
        description=i18n.t("app.description"),
    )

    # --- Paths ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        help=i18n.t("cli.args.input"),
        default=None,
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        help=i18n.t("cli.args.output"),
        default=None,
    )

    # --- Content ---
    p.add_argument(
        "-f", "--filter",
        dest="prefix_filter",
        help=i18n.t("cli.args.filter"),
        default=None,
    )
    p.add_argument(
        "--no-tree",
        action="store_true",
        help=i18n.t("cli.args.no_tree"),
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Values left at None mean "keep the base configuration".
    """
    overrides: Dict[str, Any] = {
        "input_path": args.input_path,
        "prefix_filter": args.prefix_filter,
    }

    if args.prefix_filter is not None:
        overrides["filter_enabled"] = bool(args.prefix_filter.strip())
    if args.no_tree:
        overrides["include_tree"] = False

    return overrides
