"""
This module provides logging functionality for the operadash dashboard.
"""

import logging
import os
import threading
from pathlib import Path

OPERADASH = 'operadash'
LOG_DIR_ENV = 'OPERADASH_LOG_DIR'


class _Singleton(type):
    """Metaclass returning one shared instance per class; worker threads may race the first call."""

    _instances: dict = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        with cls._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


class Logger(metaclass=_Singleton):
    """A singleton logger class for setting up logging handlers."""

    def __init__(self):
        """Initialize the logger with file and stream handlers."""
        logs_folder = Path(os.environ.get(LOG_DIR_ENV, 'logs'))
        logs_folder.mkdir(parents=True, exist_ok=True)

        # create file handler which logs even debug messages
        self.logging_file_handler = logging.FileHandler(logs_folder / f'{OPERADASH}.log', encoding='utf-8')

        # console output is only safe before or after curses owns the terminal
        self.logging_stream_handler = logging.StreamHandler()

        # create formatter and add it to the handlers
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        self.logging_file_handler.setFormatter(formatter)
        self.logging_stream_handler.setFormatter(formatter)

    def setup_logger(self, logger_name=None, enable_stream_handler=False, level=logging.INFO):
        """Set up a logger with the given name and return it.

        Args:
            logger_name (str, optional): Name of the logger. Defaults to None.
            enable_stream_handler (bool): Whether to add the stream handler for console output. Defaults to False.
            level (int): Logging level for the returned logger. Defaults to INFO.

        Returns:
            logging.Logger: The configured logger.
        """
        if not logger_name:
            logger_name = OPERADASH
        else:
            logger_name = OPERADASH + '.' + logger_name

        logger = logging.getLogger(logger_name)

        logger.setLevel(level)
        # the shared handlers are attached to every named logger, so records must not also reach the parent
        logger.propagate = False

        # add the handlers to logger
        if self.logging_file_handler not in logger.handlers:
            logger.addHandler(self.logging_file_handler)
        if enable_stream_handler and self.logging_stream_handler not in logger.handlers:
            logger.addHandler(self.logging_stream_handler)

        return logger


def null_logger(name: str = 'Navigation') -> logging.Logger:
    """Return a logger that discards everything (used when debug logging is off)."""
    logger = logging.getLogger(f'{OPERADASH}.null.{name}')
    logger.propagate = False
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


__all__ = ['Logger', 'null_logger']
