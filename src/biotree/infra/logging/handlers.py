from __future__ import annotations

"""
Logging Handlers.

Builds the console and rotating-file outputs and marks them, so that
reconfiguring BioTree never touches handlers installed by Flask, Werkzeug
or the test runner.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TypeVar

from biotree.infra.logging.config import CONSOLE_FORMAT, FILE_DATE_FORMAT, FILE_FORMAT

_MARKER = "_biotree_handler"

H = TypeVar("H", bound=logging.Handler)


def mark(handler: H) -> H:
    setattr(handler, _MARKER, True)
    return handler


def is_marked(handler: logging.Handler) -> bool:
    return getattr(handler, _MARKER, False) is True


def console_handler(level: int) -> logging.Handler:
    """stderr output; stdout stays reserved for the outline and JSON of the CLI."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return mark(handler)


def rotating_file_handler(
        path: str,
        level: int,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the log file, creating its folder.

    Returns:
        Optional[RotatingFileHandler]: None when the file cannot be opened;
        the caller keeps logging to the console.
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return mark(handler)
