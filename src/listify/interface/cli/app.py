from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, merging of configuration
sources (defaults, saved session, command-line overrides), execution of the
aggregation engine and rendering of the tagged result.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from listify.core.pipeline.engine import run_aggregation
from listify.domain.aggregation_models import AggregationResult
from listify.domain.config import get_default_config, load_config, validate_config
from listify.domain.constants import DEFAULT_OUTPUT_FILE_NAME
from listify.domain.errors import ErrorKind
from listify.infra.fs import normalize_path
from listify.infra.logging import LoggingConfig, configure_logging, get_logger
from listify.interface.cli import args as cli_args
from listify.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "INFO", console=True))
    logger.debug("CLI execution initiated. Resolving configuration...")

    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf)
    for w in warnings:
        logger.warning(f"Configuration: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    prefix_spec = conf["prefix_filter"] if conf["filter_enabled"] else ""

    try:
        result = run_aggregation(
            conf["input_path"],
            prefix_spec,
            output_path=_resolve_output_path(args.output_path, conf),
            include_tree=conf["include_tree"],
        )
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return _exit_code(result)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of non-None overrides restricted to known keys."""
    out = dict(base)
    for k in ("input_path", "prefix_filter", "filter_enabled", "include_tree"):
        if overrides.get(k) is not None:
            out[k] = overrides[k]
    return out


def _resolve_output_path(explicit: Optional[str], conf: Dict[str, Any]) -> Optional[str]:
    """Explicit -o wins; a non-default saved file name is placed in the input dir."""
    if explicit:
        return explicit
    name = conf.get("output_file_name") or DEFAULT_OUTPUT_FILE_NAME
    if name == DEFAULT_OUTPUT_FILE_NAME or not conf["input_path"]:
        return None
    return os.path.join(normalize_path(conf["input_path"]), name)

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _exit_code(result: AggregationResult) -> int:
    if result.ok:
        return EXIT_OK
    if result.error_kind is ErrorKind.INVALID_INPUT:
        return EXIT_INVALID_INPUT
    return EXIT_FAILURE


def _print_human_summary(result: AggregationResult) -> None:
    if not result.ok:
        key = (
            "cli.errors.invalid_input"
            if result.error_kind is ErrorKind.INVALID_INPUT
            else "cli.errors.file_read"
        )
        print(f"ERROR: {i18n.t(key, error=result.error)}", file=sys.stderr)
        return

    print(i18n.t("cli.status.success"))
    print(i18n.t("cli.status.output", path=result.output_path))
    print(i18n.t("cli.status.files", count=len(result.files_aggregated)))


if __name__ == "__main__":
    sys.exit(main())
