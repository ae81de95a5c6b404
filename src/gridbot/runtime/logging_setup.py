"""Logging configuration for the gridbot CLI and benchmarks."""

import logging
import os


def setup_logging(
    logger_name: str = "gridbot",
    log_file: str | None = None,
    verbose: bool = False,
    level: str = "WARNING",
    child_loggers: list[str] | None = None,
) -> logging.Logger:
    """
    Configure console logging on stderr plus an optional debug log file.

    Args:
        logger_name: Root of the logger tree to configure
        log_file: Path to log file (None for no file logging)
        verbose: Force DEBUG level on console
        level: Console level when not verbose
        child_loggers: Additional loggers to configure with the same handlers

    Returns:
        Configured logger instance
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else level)
    console_handler.setFormatter(
        logging.Formatter("%(levelname)-8s | %(name)s | %(message)s")
    )

    file_handler = None
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    for name in [logger_name, *(child_loggers or [])]:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Repeated CLI invocations in one process must not stack handlers
        logger.handlers.clear()
        logger.addHandler(console_handler)
        if file_handler:
            logger.addHandler(file_handler)

    for noisy in ["redis", "urllib3"]:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logging.getLogger(logger_name)
