from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, loading and
merging of configuration sources (defaults, saved preferences and CLI
flags), listing execution, and rendering of the per-root sections with
their issue reports.
"""

import argparse
import json
import shutil
import sys
from typing import Any, Callable, Dict, List, Optional

from dirlist.core.listing.engine import run_listing
from dirlist.core.listing.validator import validate_config
from dirlist.domain.config import get_config_file, get_default_config, load_config, save_preferences
from dirlist.domain.listing_models import ListingResult, ListingSection
from dirlist.infra.fs import to_display_text
from dirlist.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from dirlist.interface.cli import args as cli_args
from dirlist.interface.cli.colors import build_stylers, should_use_color
from dirlist.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_ROOTS = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 2 nothing could be listed,
             1 unexpected failure, 130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console stderr, optional rotating file)
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: argparse.Namespace) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve base configuration (Default vs saved preferences)
    base_conf = get_default_config() if args.use_defaults else load_config()

    # 4. Map and merge command-line overrides
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(base_conf, overrides)

    # 5. Schema validation and normalization
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_defaults:
        if save_preferences(clean_conf):
            print(i18n.t("cli.status.saved", path=get_config_file()), file=sys.stderr)
        else:
            _report(i18n.t("cli.errors.save_failed"))

    if args.dump_config:
        print(to_display_text(json.dumps(clean_conf, ensure_ascii=False, indent=2)))
        return EXIT_OK

    # 6. Presentation setup
    use_color = should_use_color(clean_conf["color"], sys.stdout)
    emphasize, header_style = build_stylers(use_color)
    terminal_width = shutil.get_terminal_size((80, 24)).columns

    # 7. Listing execution phase
    try:
        result = run_listing(
            clean_conf,
            emphasize=emphasize,
            terminal_width=terminal_width,
        )
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        _report(msg)
        return EXIT_FAILURE

    # 8. Output rendering phase
    _print_listing(result, header_style)

    if not result.ok:
        _report(i18n.t("cli.errors.no_roots"))
        return EXIT_NO_ROOTS
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys with a non-None value are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "paths", "show_hidden", "recursive", "long_format", "human_readable",
        "sort_by", "reverse", "color", "grid_width",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_listing(result: ListingResult, header_style: Callable[[str], str]) -> None:
    """
    Print every section to stdout and its issues to stderr, in root order.

    Args:
        result: The listing result to render.
        header_style: Styling applied to the 'root:' headers.
    """
    for index, section in enumerate(result.sections):
        if result.show_headers:
            if index > 0:
                print()
            print(header_style(f"{to_display_text(section.root)}:"))
        _print_section(section)


def _print_section(section: ListingSection) -> None:
    for issue in section.issues:
        _report(issue.message)
    for line in section.lines:
        print(line)


def _report(message: str) -> None:
    """Write a human-readable report to stderr, keeping stdout ordering intact."""
    sys.stdout.flush()
    print(f"{i18n.t('cli.errors.prefix')}: {to_display_text(message)}", file=sys.stderr)
    sys.stderr.flush()

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
