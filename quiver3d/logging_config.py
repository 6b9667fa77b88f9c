"""
Logging Configuration
Sets up the logger for the quiver3d namespace.
"""
import logging
import sys


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configure the 'quiver3d' logger.

    Parameters:
        level: logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: optional path to also write the log to
    """
    logger = logging.getLogger("quiver3d")
    logger.setLevel(level)

    # avoid duplicate output when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
