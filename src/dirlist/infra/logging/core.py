from __future__ import annotations

"""
Logging Lifecycle.

Wires the root logger to a single QueueHandler whose QueueListener owns the
real handlers (stderr stream, optional rotating file). Every handler created
here is tagged so that reconfiguration and shutdown only touch our own
handlers and leave those installed by test runners or embedding code alone.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from dirlist.infra.logging.config import LoggingConfig

_CONFIGURED_FLAG_ATTR: str = "_dirlist_configured"
_QUEUE_LISTENER_ATTR: str = "_dirlist_queue_listener"
_HANDLER_TAG_ATTR: str = "_dirlist_handler"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once per process.

    Args:
        cfg: Logging settings.
        force: Rebuild the handlers even if logging is already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = cfg.level_value
    root.setLevel(level)
    _detach(root)

    targets = _build_targets(cfg, level)
    if not targets:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    listener = QueueListener(log_queue, *targets, respect_handler_level=True)
    listener.start()
    atexit.register(_stop_listener, listener)

    root.addHandler(_tagged(QueueHandler(log_queue)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    """Named logger; records propagate to the handlers installed here."""
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Drain pending records and detach everything configure_logging installed.

    The CLI calls this before returning so that diagnostics reach stderr and
    the log file ahead of the process exit.
    """
    root = logging.getLogger()
    _detach(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# HANDLER CONSTRUCTION
# ==============================================================================

def _build_targets(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    """Handlers driven by the QueueListener thread."""
    targets: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        targets.append(_tagged(console))

    if cfg.log_file:
        file_handler = _open_log_file(cfg, level)
        if file_handler is not None:
            targets.append(file_handler)

    return targets


def _open_log_file(cfg: LoggingConfig, level: int) -> Optional[RotatingFileHandler]:
    """Rotating file handler, or None when the file cannot be opened."""
    log_file = str(cfg.log_file)
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        # Logging cannot report its own failure
        sys.stderr.write(f"WARNING: cannot open log file '{log_file}': {e}\n")
        return None

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return _tagged(handler)


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_ours(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# TEARDOWN
# ==============================================================================

def _detach(root: logging.Logger) -> None:
    """Stop the active listener and close our handlers on the root logger."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in list(root.handlers):
        if _is_ours(handler):
            root.removeHandler(handler)
            handler.close()


def _stop_listener(listener: QueueListener) -> None:
    """Stop a listener; the atexit hook may reach one that is already stopped."""
    if getattr(listener, "_thread", None) is None:
        return
    listener.stop()
    for handler in listener.handlers:
        handler.close()
