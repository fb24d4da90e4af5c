from __future__ import annotations

"""
Logging Lifecycle.

Request handlers only enqueue records; a QueueListener thread formats them
and writes to the console and the log file, so a slow disk never delays a
tree request.
"""

import atexit
import logging
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from biotree.infra.logging.config import LoggingConfig
from biotree.infra.logging.handlers import console_handler, is_marked, mark, rotating_file_handler

_listener: Optional[QueueListener] = None
_outputs: List[logging.Handler] = []


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """
    Install BioTree logging on the root logger.

    Calling it again replaces the previous setup, so handlers never pile up.

    Returns:
        logging.Logger: The root logger.
    """
    global _listener, _outputs

    shutdown_logging()

    root = logging.getLogger()
    root.setLevel(config.level)

    outputs: List[logging.Handler] = [console_handler(config.level)]
    if config.log_file:
        file_handler = rotating_file_handler(
            config.log_file, config.level, config.max_bytes, config.backup_count
        )
        if file_handler is not None:
            outputs.append(file_handler)

    records: queue.SimpleQueue = queue.SimpleQueue()
    root.addHandler(mark(QueueHandler(records)))

    _listener = QueueListener(records, *outputs, respect_handler_level=True)
    _listener.start()
    _outputs = outputs

    if config.log_file and len(outputs) > 1:
        logging.getLogger(__name__).debug(f"Logging to {config.log_file}")
    return root


def shutdown_logging() -> None:
    """Flush queued records, close the outputs and detach BioTree handlers."""
    global _listener, _outputs

    if _listener is not None:
        _listener.stop()
        _listener = None

    for handler in _outputs:
        handler.close()
    _outputs = []

    root = logging.getLogger()
    for handler in [h for h in root.handlers if is_marked(h)]:
        root.removeHandler(handler)
        handler.close()


atexit.register(shutdown_logging)
