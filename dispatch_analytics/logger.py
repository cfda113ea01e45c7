from __future__ import annotations

import logging
from pathlib import Path

from dispatch_analytics.environment import environment_configuration

REPORT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def build_logger(
    name: str,
    log_file: Path | str,
    level: int | str,
    log_format: str = REPORT_LOG_FORMAT,
    console: bool = True,
    propagate: bool = True,
) -> logging.Logger:
    """
    Create a named logger writing to ``log_file`` and optionally the console.

    Handlers are only attached the first time a name is built, so report
    modules imported by several worker threads share one set of handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = propagate

    if not logger.handlers:
        formatter = logging.Formatter(log_format)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

    return logger


def main_logger() -> logging.Logger:
    """
    Logger for report runs: start, duration, row counts and failures.

    Returns:
        logging.Logger: Console and ``dispatch_analytics.log`` logger.
    """
    return build_logger(
        "dispatch_analytics",
        Path(environment_configuration.log_directory) / "dispatch_analytics.log",
        environment_configuration.log_level.upper(),
    )


def debug_logger() -> logging.Logger:
    """
    Per-claim diagnostics, such as claims dropped from a payout forecast.

    Kept out of the console and the report log.
    """
    return build_logger(
        "dispatch_analytics.debug",
        Path(environment_configuration.log_directory) / "dispatch_analytics_debug.log",
        logging.DEBUG,
        log_format=DEBUG_LOG_FORMAT,
        console=False,
        propagate=False,
    )


logger = main_logger()
d_logger = debug_logger()
