from __future__ import annotations

"""
Logging Settings.

Derives the logging setup of a BioTree command from its runtime
configuration: severity, and whether records are also kept on disk.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from biotree.domain.config import AppConfig
from biotree.infra.fs import get_user_data_dir

LOG_FILE_NAME = "biotree.log"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 3

CONSOLE_FORMAT = "[%(name)s] %(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_default_log_path() -> str:
    """Log file kept by the server when none is configured."""
    return os.path.join(get_user_data_dir(), "logs", LOG_FILE_NAME)


def parse_level(name: str) -> int:
    """Map a level name ('debug', 'WARNING', ...) to its value, INFO when unknown."""
    level = getattr(logging, (name or "").strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging setup of one process.

    Attributes:
        level: Minimum severity, as a logging constant.
        log_file: Rotating log file, or None for console only.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the active one.
    """
    level: int = logging.INFO
    log_file: Optional[str] = None
    max_bytes: int = LOG_MAX_BYTES
    backup_count: int = LOG_BACKUP_COUNT

    @classmethod
    def from_app_config(cls, cfg: AppConfig, *, persistent: bool = False) -> LoggingConfig:
        """
        Build the logging setup of a command.

        Args:
            cfg: Validated runtime configuration.
            persistent: Keep a log file even when cfg.log_file is empty
                        (the long-running server does).
        """
        log_file = cfg.log_file or (get_default_log_path() if persistent else "")
        return cls(level=parse_level(cfg.log_level), log_file=log_file or None)
