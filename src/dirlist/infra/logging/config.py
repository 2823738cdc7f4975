from __future__ import annotations

"""
Logging Configuration Model.

Immutable description of how the logging subsystem should be wired for
one process, plus the mapping from level names to logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging subsystem settings.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records on stderr (stdout is reserved for the listing).
        log_file: Optional rotating log file.
        max_bytes: Rollover threshold of the log file.
        backup_count: Rotated segments kept next to the log file.
        console_fmt: Format for stderr records.
        file_fmt: Format for log file records.
        datefmt: Timestamp format for log file records.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings used by the command line: warnings only unless debugging."""
        return cls(level="DEBUG" if debug else "WARNING", console=True, log_file=log_file)

    @property
    def level_value(self) -> int:
        """Numeric level; unknown names degrade to WARNING."""
        if not self.level:
            return logging.WARNING
        return _LEVEL_MAP.get(str(self.level).strip().upper(), logging.WARNING)
