"""
Thin logging facade shared by the grid conversion modules.

Usage:
    Logger.log("INFO", "message")
"""

import logging

from utils.config_utils import load_config

LOGGER_NAME = "mgrs_grid"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Logger:
    _logger = None

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Returns the shared logger, configuring it from config.yaml on first use.
        """
        if cls._logger is None:
            logger = logging.getLogger(LOGGER_NAME)
            level = load_config().get("logging", {}).get("level", "INFO")
            logger.setLevel(level.upper())
            if not logger.handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
                logger.addHandler(handler)
            cls._logger = logger
        return cls._logger

    @classmethod
    def log(cls, level: str, message: str) -> None:
        """
        Log a message.

        Args:
            level: One of "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL".
            message: The message to log.
        """
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Invalid log level: {level}")
        cls.get_logger().log(numeric_level, message)
