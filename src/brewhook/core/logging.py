"""Centralised logging setup for brewhook."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.types import FilteringBoundLogger

from brewhook.core.config import discover_env

_CONFIGURED = False
_HANDLERS: list[logging.Handler] = []


def sanitise_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Drop None values from the event dictionary.

    Args:
        logger: The logger instance.
        method_name: The name of the method called on the logger.
        event_dict: The event dictionary to sanitise.

    Returns:
        The sanitised event dictionary.
    """
    return {k: v for k, v in event_dict.items() if v is not None}


def configure_logging(
    level: str | None = None,
    log_file: Path | None = None,
    enable_console: bool = False,
    force: bool = False,
) -> None:
    """Configure logging for brewhook.

    Args:
        level: The logging level as a string (e.g., "DEBUG", "INFO").
            Defaults to ``BREWHOOK_LOG_LEVEL``.
        log_file: Optional path to a log file. Defaults to
            ``<log_dir>/brewhook.log``.
        enable_console: Whether to render log events on stderr.
        force: Replace an earlier configuration instead of keeping it.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    while _HANDLERS:
        handler = _HANDLERS.pop()
        logging.root.removeHandler(handler)
        handler.close()

    env = discover_env()
    level_no = getattr(logging, (level or env.log_level).upper(), logging.INFO)

    if log_file is None:
        env.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = env.log_dir / "brewhook.log"

    file_handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=2)
    file_handler.setLevel(level_no)

    shared_processors = [
        sanitise_context,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level_no)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.root.addHandler(console_handler)
        _HANDLERS.append(console_handler)
        renderers = [
            structlog.processors.ExceptionRenderer(),
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=shared_processors + renderers,
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.root.setLevel(level_no)
    logging.root.addHandler(file_handler)
    _HANDLERS.append(file_handler)

    _CONFIGURED = True


def get_logger(name: str = "brewhook") -> FilteringBoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional name for the logger, typically the module name.

    Returns:
        A structlog FilteringBoundLogger instance.

    Usage:
        log = get_logger(__name__)
        log.info("install_complete", package="wget", kind="formula", duration_ms=812)

    Standard context keys:
        - package (str): Name of the formula, cask or tap
        - kind (str): "formula" or "cask"
        - command (str): The brew command line
        - returncode (int): Exit status of a brew command
        - duration_ms (int): Operation duration in milliseconds
        - error (str): Error message if applicable
    """
    if not _CONFIGURED:
        configure_logging()
    return structlog.get_logger(name)
