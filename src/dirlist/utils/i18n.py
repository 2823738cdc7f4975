from __future__ import annotations

"""
Internationalization (i18n) Utility.

Provides a centralized singleton manager for user-facing strings. Implements
dot-notation lookup for nested JSON locale files and variable interpolation
for CLI help texts and diagnostic messages.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SYSTEM DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_LOCALE = "en"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")
LOCALE_ENV_VAR = "DIRLIST_LOCALE"

# -----------------------------------------------------------------------------
# I18N MANAGER SERVICE
# -----------------------------------------------------------------------------

class I18n:
    """
    Resource manager for locale-specific string translations.

    Loads JSON resource files from the locale directory and resolves
    dotted keys, returning the key itself when a lookup fails.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = locale
        self._translations: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Load a specific translation dictionary from the filesystem.

        Args:
            locale: ISO identifier for the target language.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            if locale != DEFAULT_LOCALE:
                logger.warning(f"I18n: Locale '{locale}' not available. Falling back to '{DEFAULT_LOCALE}'.")
                self.load_locale(DEFAULT_LOCALE)
                return
            logger.warning(f"I18n: Locale resource missing at '{file_path}'. Fallback active.")
            self._translations = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._translations = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"I18n: Corruption in locale file {file_path}: {e}")
            self._translations = {}
            self.is_loaded = False
            return

        self._locale = locale
        self.is_loaded = True
        logger.debug(f"I18n: Successfully loaded locale dictionary: {locale}")

    def t(self, key: str, default: str = "", **kwargs: Any) -> str:
        """
        Resolve and format a translation string using dot-notation.

        Args:
            key: Hierarchical identifier path (e.g., 'cli.args.all').
            default: Text used when the key is missing.
            **kwargs: Dynamic variables for string formatting.

        Returns:
            str: The translated and formatted string; the default (or the
                 key itself) when resolution fails.
        """
        current_val: Any = self._translations
        for k in key.split("."):
            if not isinstance(current_val, dict):
                current_val = None
                break
            current_val = current_val.get(k)

        if not isinstance(current_val, str):
            current_val = default or key

        if not kwargs:
            return current_val
        try:
            return current_val.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: Interpolation error for path '{key}': {e}")
            return current_val

# -----------------------------------------------------------------------------
# SERVICE INITIALIZATION
# -----------------------------------------------------------------------------

# Global singleton instance for application-wide resource access
i18n = I18n(os.environ.get(LOCALE_ENV_VAR) or DEFAULT_LOCALE)
