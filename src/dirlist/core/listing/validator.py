from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the listing engine, ensuring that the
configuration dictionary conforms to the expected schema. Handles type
coercion, choice validation and default value injection so that values
coming from the CLI or from the persisted preferences file behave the same.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from dirlist.domain.config import COLOR_CHOICES, SORT_CHOICES, get_default_config

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    bool_fields = [
        "show_hidden", "recursive", "long_format", "human_readable", "reverse",
    ]
    choice_fields = {
        "sort_by": SORT_CHOICES,
        "color": COLOR_CHOICES,
    }

    # 3. Field Processing & Normalization
    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field, choices in choice_fields.items():
        merged[field] = _as_choice(merged.get(field), defaults[field], choices, field, warnings, strict)

    merged["grid_width"] = _as_int(
        merged.get("grid_width"), defaults["grid_width"], "grid_width", warnings, strict
    )
    merged["time_format"] = _as_str(
        merged.get("time_format"), defaults["time_format"], "time_format", warnings, strict
    )
    merged["paths"] = _as_list_str(merged.get("paths"), [], "paths", warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value if value.strip() else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Accept non-negative integers, with numeric-string coercion."""
    if isinstance(value, bool):
        value = None if strict else int(value)
    if value is None:
        return fallback
    if isinstance(value, int) and value >= 0:
        return value
    if isinstance(value, str) and not strict and value.strip().isdigit():
        warnings.append(f"Field '{field}' converted from '{value}' to int.")
        return int(value.strip())

    msg = f"Invalid field '{field}': expected non-negative int, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_choice(
        value: Any,
        fallback: str,
        choices: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Ensure the value is one of the allowed lowercase keywords."""
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()

    msg = f"Invalid field '{field}': expected one of {', '.join(choices)}, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of non-empty strings."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        warnings.append(f"Field '{field}' converted from str to list.")
        return [value] if value.strip() else list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str) and item.strip():
                out.append(item)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected non-empty str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)
