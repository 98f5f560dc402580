"""Utility functions for basic-vfs."""

import os
import sys
from pathlib import Path

from loguru import logger

DATA_DIR_NAME = ".basic-vfs"
LOG_FILE_NAME = "basic-vfs.log"


def data_dir_path() -> Path:
    """App state directory for config and logs.

    Uses BASIC_VFS_CONFIG_DIR when set so tests and separate runs can isolate state.
    """
    if config_dir := os.getenv("BASIC_VFS_CONFIG_DIR"):
        return Path(config_dir)

    home = os.getenv("HOME", Path.home())
    return Path(home) / DATA_DIR_NAME


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_to_stdout: bool = False,
) -> None:  # pragma: no cover
    """Configure loguru sinks.

    Args:
        log_level: Minimum level for every sink
        log_to_file: Write to a rotating file in the data directory
        log_to_stdout: Write to stderr, keeping stdout free for command output
    """
    # Remove default handler and any existing handlers
    logger.remove()

    if log_to_file:
        log_path = data_dir_path() / LOG_FILE_NAME
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=log_level,
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=True,
            enqueue=True,
            colorize=False,
        )

    if log_to_stdout:
        logger.add(sys.stderr, level=log_level, backtrace=True, diagnose=True, colorize=True)

    logger.debug(f"Logging configured: level={log_level} file={log_to_file} stdout={log_to_stdout}")
