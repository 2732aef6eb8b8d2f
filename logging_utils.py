"""
Logging Utilities for the Site Analysis workflow

Provides run-scoped logging configuration and structured exception logging so a
failed analysis or export leaves an audit trail next to the report artifacts.
"""

import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple


def setup_run_logging(report_dir: str, location: str) -> Tuple[logging.Logger, str]:
    """
    Set up file-based logging for one site analysis run.
    Configures the ROOT logger so every module logger inherits the file handler.

    Args:
        report_dir: Directory where the report artifacts will be saved
        location: Location query for context

    Returns:
        Tuple of (run_logger instance, log_file_path)
    """
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_filename = f"run_log_{timestamp}.log"
    log_file_path = str(Path(report_dir) / log_filename)

    Path(report_dir).mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.FileHandler(log_file_path, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    run_logger = logging.getLogger('site_run')
    run_logger.setLevel(logging.DEBUG)

    run_logger.debug("=" * 70)
    run_logger.debug("Spirulina Site Analysis - Run Log")
    run_logger.debug(f"Location: {location}")
    run_logger.debug(f"Report Directory: {report_dir}")
    run_logger.debug(f"Log File: {log_filename}")
    run_logger.debug(f"Started: {datetime.now().isoformat()}")
    run_logger.debug("=" * 70)

    return run_logger, log_file_path


def log_exception(logger: logging.Logger, exc: Exception, context: str = "",
                  location: Optional[str] = None, **kwargs) -> None:
    """
    Log a full exception with traceback and context information.

    Args:
        logger: Logger instance to use
        exc: Exception that was raised
        context: Additional context string
        location: Location query for context
        **kwargs: Additional context key-value pairs
    """
    error_msg = f"Exception occurred: {type(exc).__name__}: {exc}"
    if context:
        error_msg = f"{context} - {error_msg}"

    logger.error(error_msg)
    logger.debug("Traceback:\n%s", "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))

    if location:
        logger.error(f"Location: {location}")

    if kwargs:
        logger.error(f"Context: {kwargs}")
