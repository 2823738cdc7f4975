from __future__ import annotations

"""
Terminal Color Emission.

Turns the formatter's emphasis decisions into ANSI sequences with colorama.
Styling is stateless per call; the only process-wide step is the one-time
Windows console fix applied when color output is enabled.
"""

import os
from typing import Callable, TextIO, Tuple

from colorama import Fore, Style, just_fix_windows_console

# -----------------------------------------------------------------------------
# STYLE DEFINITIONS
# -----------------------------------------------------------------------------

DIRECTORY_STYLE = Style.BRIGHT + Fore.BLUE
HEADER_STYLE = Fore.GREEN


def style_directory(text: str) -> str:
    return f"{DIRECTORY_STYLE}{text}{Style.RESET_ALL}"


def style_header(text: str) -> str:
    return f"{HEADER_STYLE}{text}{Style.RESET_ALL}"


def no_style(text: str) -> str:
    return text

# -----------------------------------------------------------------------------
# POLICY
# -----------------------------------------------------------------------------

def should_use_color(mode: str, stream: TextIO) -> bool:
    """
    Decide whether ANSI styling should be written to a stream.

    Args:
        mode: 'always', 'never' or 'auto'.
        stream: Output stream the listing is written to.

    Returns:
        bool: True when styling is enabled.
    """
    if mode == "always":
        return True
    if mode == "never":
        return False
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def build_stylers(enabled: bool) -> Tuple[Callable[[str], str], Callable[[str], str]]:
    """
    Return the (directory, header) styling callables for a run.

    Args:
        enabled: Result of should_use_color.

    Returns:
        Tuple: Directory and header stylers; identity functions when disabled.
    """
    if not enabled:
        return no_style, no_style
    just_fix_windows_console()
    return style_directory, style_header
