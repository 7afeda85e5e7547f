from __future__ import annotations

"""
Logging Settings.

The CLI writes its report to stdout, so diagnostics go to stderr and,
optionally, to a rotating log file. Normal runs only surface warnings;
the debug flag turns on the step-by-step traversal tracing emitted by the
extractor, resolver and builder.
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
    Immutable settings of one logging bootstrap.

    Attributes:
        level: Level name; unknown names fall back to INFO.
        console: Mirror records on stderr.
        log_file: Path of the rotating log file, None to disable it.
        max_bytes: Rollover threshold of the log file.
        backup_count: Rotated log files kept on disk.
        console_fmt: Record format on stderr.
        file_fmt: Record format in the log file.
        datefmt: Timestamp format of file records.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings for a command-line run: DEBUG tracing or warnings only."""
        return cls(level="DEBUG" if debug else "WARNING", console=True, log_file=log_file or None)

    @property
    def level_value(self) -> int:
        """Numeric level of the configured level name."""
        if not self.level:
            return logging.INFO
        return _LEVEL_MAP.get(str(self.level).strip().upper(), logging.INFO)
