"""
Logging configuration for PhotoPrint Relay.

All components log through children of the ``photoprint_relay`` logger.
The console handler colours the level tag so errors stand out in the
launcher window; a rotating file log can be enabled for kiosk installs.

Log Format:
    2026-10-18 10:15:30 [ INFO ] photoprint_relay.app - Print server listening
    2026-10-18 10:15:31 [ ERROR ] photoprint_relay.job - [1f2e3d4c] Print failed

Usage:
    from photoprint_relay.logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO)
    logger = get_logger(__name__)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER = 'photoprint_relay'

# Module loggers and per-job adapters are both accepted wherever a log is passed
AnyLogger = Union[logging.Logger, logging.LoggerAdapter]

# ANSI colours per level; 24-bit #02C5FF for INFO
_COLOURS = {
    logging.DEBUG: '\x1b[90m',
    logging.INFO: '\x1b[38;2;2;197;255m',
    logging.WARNING: '\x1b[33m',
    logging.ERROR: '\x1b[31m',
    logging.CRITICAL: '\x1b[1;31m',
}
_RESET = '\x1b[0m'


class LevelTagFormatter(logging.Formatter):
    """Formatter that renders the level as a ``[ LEVEL ]`` tag, optionally coloured."""

    def __init__(self, colour: bool = True):
        super().__init__(
            fmt='%(asctime)s %(level_tag)s %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        )
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        # Banner lines go out bare, tinted like the INFO tag
        if getattr(record, 'banner', False):
            if self.colour:
                return f'{_COLOURS[logging.INFO]}{record.getMessage()}{_RESET}'
            return record.getMessage()
        tag = f'[ {record.levelname} ]'
        if self.colour:
            tag = f'{_COLOURS.get(record.levelno, "")}{tag}{_RESET}'
        record.level_tag = tag
        return super().format(record)


def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        log_level: Minimum level, as a number or a level name
        log_dir: Directory for a rotating ``photoprint_relay.log`` (optional)

    Returns:
        The configured ``photoprint_relay`` logger
    """
    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(LevelTagFormatter(colour=sys.stdout.isatty()))
    logger.addHandler(console_handler)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_dir / f'{ROOT_LOGGER}.log',
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding='utf-8',
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(LevelTagFormatter(colour=False))
        logger.addHandler(file_handler)
        logger.info('File logging enabled: %s', log_dir)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``photoprint_relay`` namespace."""
    if not name.startswith(ROOT_LOGGER):
        name = f'{ROOT_LOGGER}.{name}'
    return logging.getLogger(name)


class JobLoggerAdapter(logging.LoggerAdapter):
    """Prefixes messages with the short job id: ``[1f2e3d4c] Print failed``."""

    def process(self, msg, kwargs):
        kwargs.setdefault('extra', {}).update(self.extra)
        return f'[{self.extra["job_id"]}] {msg}', kwargs


def get_job_logger(job_id: str) -> JobLoggerAdapter:
    """
    Get a logger for one print job (first 8 chars of the id).

    All jobs share the ``photoprint_relay.job`` logger; the adapter is
    dropped with the job, so nothing accumulates in the logging registry.
    """
    return JobLoggerAdapter(get_logger('job'), {'job_id': job_id[:8]})
