"""
Utility functions for the schema dumper.
"""

import logging
import sys
from pathlib import Path
from typing import Any, TextIO

STDOUT = '-'


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration.

    Log records go to stderr so that stdout can carry the dump itself.
    """
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def open_output(target: str) -> TextIO:
    """Open the dump sink: a file path, or '-' for stdout."""
    if target == STDOUT:
        return sys.stdout

    output_path = Path(target)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return open(output_path, 'w', encoding='utf-8')


def print_dry_run_info(connection_settings: dict[str, Any], output_settings: dict[str, Any]) -> None:
    """Log what would be dumped in dry-run mode."""
    logging.info(
        f"Would dump database: {connection_settings['database']} from "
        f"{connection_settings['host']}:{connection_settings.get('port', 3306)}"
    )
    logging.info(f"  Output: {output_settings.get('file', STDOUT)}")
    page_size = output_settings.get('page_size')
    if page_size is not None:
        logging.info(f"  Page size: {page_size} rows")
