"""
AppLogger - logging facade for ETABS automation scripts.

Forwards to a structured ``logging.Logger`` when the host application
supplies one, otherwise prints plain status lines to the console.
"""

import logging
import sys
from typing import Dict, Optional

DEFAULT_LOGGER_NAME = "etabs_app_logger"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

_app_loggers: Dict[str, "AppLogger"] = {}


class AppLogger:
    """Info/warning/error facade with a console fallback"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger

    @property
    def structured(self) -> bool:
        return self._logger is not None

    def log(self, message: str):
        if self._logger is not None:
            self._logger.info(message)
        else:
            print(f"Log: {message}")

    def log_error(self, message: str, exception: Optional[BaseException] = None):
        if self._logger is not None:
            self._logger.error(message, exc_info=exception)
        else:
            print(f"Error: {message}")
            if exception is not None:
                print(f"Exception: {exception}")

    def log_warning(self, message: str, exception: Optional[BaseException] = None):
        if self._logger is not None:
            if exception is not None:
                self._logger.warning(message, exc_info=exception)
            else:
                self._logger.warning(message)
        else:
            print(f"Warning: {message}")
            if exception is not None:
                print(f"Exception: {exception}")


def configure_logging(level=logging.INFO, stream=None):
    """Configure root logging the way the ETABS scripts expect"""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
    )


def get_app_logger(name: str = DEFAULT_LOGGER_NAME) -> AppLogger:
    """Return the shared AppLogger bound to ``logging.getLogger(name)``.

    One instance per logger name for the lifetime of the process, so every
    caller inside a host application writes through the same facade.
    """
    app_logger = _app_loggers.get(name)
    if app_logger is None:
        app_logger = AppLogger(logging.getLogger(name))
        _app_loggers[name] = app_logger
    return app_logger
