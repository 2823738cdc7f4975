from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema, including help messages,
argument types, and defaults. Provides logic to translate raw argparse
namespaces into domain-compatible configuration overrides.
"""

import argparse
from typing import Any, Dict

from dirlist.core.services.sorter import resolve_sort_key
from dirlist.domain.config import COLOR_CHOICES, SORT_CHOICES
from dirlist.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dirlist CLI.

    Boolean flags default to None so that an absent flag does not override
    a saved preference; their '--no-' forms switch a saved preference off.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dirlist",
        description=i18n.t("app.description"),
    )

    # --- Targets ---
    p.add_argument(
        "paths",
        nargs="*",
        help=i18n.t("cli.args.paths"),
    )

    # --- Collection ---
    p.add_argument(
        "-a", "--all",
        dest="show_hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=i18n.t("cli.args.all"),
    )
    p.add_argument(
        "-R", "--recursive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=i18n.t("cli.args.recursive"),
    )

    # --- Presentation ---
    p.add_argument(
        "-l", "--long-format",
        dest="long_format",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=i18n.t("cli.args.long_format"),
    )
    p.add_argument(
        "-H", "--human-readable",
        dest="human_readable",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=i18n.t("cli.args.human_readable"),
    )
    p.add_argument(
        "--color",
        choices=COLOR_CHOICES,
        default=None,
        help=i18n.t("cli.args.color"),
    )
    p.add_argument(
        "--width",
        dest="grid_width",
        type=int,
        default=None,
        help=i18n.t("cli.args.width"),
    )

    # --- Ordering ---
    p.add_argument(
        "--sort",
        dest="sort_by",
        choices=SORT_CHOICES,
        default=None,
        help=i18n.t("cli.args.sort"),
    )
    p.add_argument(
        "-t", "--sort-by-time",
        dest="sort_by_time",
        action="store_true",
        help=i18n.t("cli.args.sort_by_time"),
    )
    p.add_argument(
        "-S", "--sort-by-size",
        dest="sort_by_size",
        action="store_true",
        help=i18n.t("cli.args.sort_by_size"),
    )
    p.add_argument(
        "-r", "--reverse",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=i18n.t("cli.args.reverse"),
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.defaults"),
    )
    p.add_argument(
        "--save-defaults",
        action="store_true",
        help=i18n.t("cli.args.save_defaults"),
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help=i18n.t("cli.args.dump"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file"),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a domain configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset; None means 'not given'.
    """
    overrides: Dict[str, Any] = {}

    overrides["paths"] = list(args.paths) if args.paths else None

    overrides["show_hidden"] = args.show_hidden
    overrides["recursive"] = args.recursive
    overrides["long_format"] = args.long_format
    overrides["human_readable"] = args.human_readable
    overrides["reverse"] = args.reverse
    overrides["color"] = args.color
    overrides["grid_width"] = args.grid_width

    # -t and -S take precedence over --sort; time wins over size
    if args.sort_by_time or args.sort_by_size:
        overrides["sort_by"] = resolve_sort_key(args.sort_by_time, args.sort_by_size).value
    else:
        overrides["sort_by"] = args.sort_by

    return overrides
