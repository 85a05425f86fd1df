"""Logging setup for the custom domain reconciler.

Three groups of loggers are tuned independently: the package itself (the
root level), the waiter (one DEBUG line per poll, noisy on long creates)
and the AWS SDK, which logs every request and response body at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from apprunner_domains.config import LoggingSettings, load_settings

_LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

SDK_LOGGERS = ("botocore", "boto3", "urllib3")
WAITER_LOGGER = "apprunner_domains.lifecycle.waiter"

logger = logging.getLogger(__name__)


def parse_level(name: str | None, default: int) -> int:
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    logger.warning("Unknown log level %r, using %s", name, logging.getLevelName(default))
    return default


def logger_levels(settings: LoggingSettings) -> dict[str, int]:
    """Map logger names to the level each one should run at."""
    root = parse_level(settings.level, logging.INFO)
    levels = {"": root}
    sdk = parse_level(settings.botocore_level, logging.WARNING)
    for name in SDK_LOGGERS:
        levels[name] = sdk
    levels[WAITER_LOGGER] = parse_level(settings.waiter_level, root)
    return levels


def _file_handler(path: str) -> logging.Handler | None:
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path)
    except OSError as exc:
        logger.warning("Cannot write log file %s: %s", path, exc)
        return None


def configure_logging(settings: LoggingSettings | None = None) -> dict[str, int]:
    if settings is None:
        settings = load_settings().logging

    formatter = logging.Formatter(_LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.file:
        handler = _file_handler(settings.file)
        if handler is not None:
            handlers.append(handler)
    for handler in handlers:
        handler.setFormatter(formatter)

    levels = logger_levels(settings)
    logging.basicConfig(level=levels[""], handlers=handlers, force=True)
    for name, level in levels.items():
        if name:
            logging.getLogger(name).setLevel(level)
    return levels
