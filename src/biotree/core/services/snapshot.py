from __future__ import annotations

"""
Snapshot History Writer.

Persists every rendered outline as a timestamped Markdown file so earlier
states of the data collection can be browsed later. The history folder is
append-only and has no retention policy.
"""

import logging
import os
from datetime import datetime
from typing import Optional

from biotree.domain.constants import SNAPSHOT_TIMESTAMP_FORMAT
from biotree.infra.fs import FileWriter, LocalFileWriter

logger = logging.getLogger(__name__)


def build_snapshot_filename(
        base_name: str,
        root_category: str,
        now: Optional[datetime] = None,
) -> str:
    """
    Compose '<YYYYMMDDhhmmss>_<base_name>_by_<root_category>.md' in local time.
    """
    timestamp = (now or datetime.now()).strftime(SNAPSHOT_TIMESTAMP_FORMAT)
    return f"{timestamp}_{base_name}_by_{root_category}.md"


def save_snapshot(
        markdown: str,
        base_name: str,
        root_category: str,
        history_dir: str,
        writer: Optional[FileWriter] = None,
        now: Optional[datetime] = None,
) -> str:
    """
    Write a Markdown snapshot into the history folder.

    Creates the folder when missing. A snapshot written within the same
    second for the same ordering replaces the previous one.

    Args:
        markdown: Document content.
        base_name: Base name embedded in the filename.
        root_category: Ordering used to build the tree.
        history_dir: Target folder.
        writer: File writing capability (local disk by default).
        now: Timestamp override.

    Returns:
        str: Path of the written file.

    Raises:
        OSError: If the folder cannot be created or the file written.
    """
    writer = writer or LocalFileWriter()
    file_path = os.path.join(history_dir, build_snapshot_filename(base_name, root_category, now))

    try:
        writer.ensure_directory(history_dir)
        writer.write_text(file_path, markdown)
    except OSError as e:
        logger.error(f"Failed to save markdown file '{file_path}': {e}")
        raise

    logger.info(f"Markdown file added to history folder at: {file_path}")
    return file_path
