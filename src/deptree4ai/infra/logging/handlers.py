from __future__ import annotations

"""
Logging Sinks.

Builds the handlers fed by the queue listener: a stderr console (stdout
carries the rendered report) and an optional rotating log file. Every
handler is tagged so a reconfiguration only removes the ones created here.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from deptree4ai.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_deptree4ai_handler"

# ==============================================================================
# HANDLER FACTORIES
# ==============================================================================

def build_handlers(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the sinks requested by the settings.

    Args:
        cfg: Logging settings.

    Returns:
        List[logging.Handler]: Tagged handlers; empty when no sink is enabled
                               or the log file cannot be opened.
    """
    level_int = cfg.level_value
    handlers: List[logging.Handler] = []

    if cfg.console:
        handlers.append(create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))

    if cfg.log_file:
        fh = create_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers.append(fh)

    return handlers


def create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.Handler:
    """Stream records to stderr so they never mix with the report on stdout."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    tag_handler(sh)
    return sh


def create_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file given with --log-file.

    A file that cannot be opened is reported on stderr and skipped; the
    analysis still runs.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None on I/O failure.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        if parent:
            os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    tag_handler(fh)
    return fh

# ==============================================================================
# TAGGING
# ==============================================================================

def tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def is_tagged_handler(handler: logging.Handler) -> bool:
    """True for handlers created by this package."""
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))
