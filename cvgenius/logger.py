"""
Engine logger.

Provides the logging interface for the templating engine with an automatic
[cvgenius] prefix. Engine modules import the helpers from here rather than
configuring loguru themselves.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONTEXT_PREFIX = "[cvgenius]"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logger(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Configure loguru sinks for the engine.

    Args:
        level: Minimum level for every sink
        log_file: Optional file to mirror log output into (rotated at 10 MB)

    Example:
        from cvgenius.logger import setup_logger, _log_info

        setup_logger("DEBUG")
        _log_info("Registry ready")
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level=level.upper(),
            format=LOG_FORMAT,
            rotation="10 MB",
            enqueue=True,
        )


# Wrapper functions with automatic [cvgenius] prefix


def _log_info(message: str) -> None:
    """Log info message with [cvgenius] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [cvgenius] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [cvgenius] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [cvgenius] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [cvgenius] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level engine logging helpers


def log_catalogue_loaded(source: Path, cv_count: int, letter_count: int) -> None:
    """Log a freshly loaded template catalogue."""
    _log_info(f"Loaded template catalogue: {cv_count} CV, {letter_count} cover-letter templates")
    _log_debug(f"  Source: {source}")


def log_render_result(template_id: str, html_length: int, css_length: int, skipped: int) -> None:
    """Log the outcome of one render pass."""
    _log_debug(
        f"Rendered with '{template_id}': {html_length} chars HTML, {css_length} chars CSS"
    )
    if skipped:
        _log_warning(f"{skipped} section(s) skipped while rendering with '{template_id}'")
