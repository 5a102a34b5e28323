"""logging.py
Logger setup for the server, the AI gateway and the test session.

Handlers per environment (ENV):
    development / local / test : console + timestamped file under `logs/`
    staging / production       : console + CloudWatch (if watchtower is installed)
"""
from typing import Dict, Literal
import logging
import os
import sys
from datetime import datetime
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")

LoggerType = Literal["default", "pytest", "gateway", "gateway_error"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_LOG_ENVS = ("development", "local", "test")
CLOUD_LOG_ENVS = ("staging", "production")

# Subfolder of the base log folder per logger type
LOG_SUBFOLDERS: Dict[str, str] = {
    "default": "",
    "pytest": "tests",
    "gateway": "gateway",
    "gateway_error": "gateway_errors",
}

CLOUDWATCH_LOG_GROUPS: Dict[str, str] = {
    "default": "career_studio_logs",
    "gateway": "gateway_logs",
    "gateway_error": "gateway_error_logs",
}


def cloudwatch_log_group(logger_type: LoggerType) -> str:
    return CLOUDWATCH_LOG_GROUPS.get(logger_type, CLOUDWATCH_LOG_GROUPS["default"])


def running_under_pytest() -> bool:
    return any("pytest" in arg for arg in sys.argv)


class LoggerFactory:
    """
    Builds named loggers with the handlers appropriate to the environment.

    A logger is configured once; asking for the same name again returns it
    unchanged. Loggers never propagate to the root logger.

    Attributes:
        env (str): Deployment environment, defaults to $ENV.
        base_log_folder (str): Root folder for file logs.
    """

    def __init__(self, env: str = ENV, base_log_folder: str = "logs"):
        self.env = env
        self.base_log_folder = base_log_folder

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True
    ) -> logging.Logger:
        logger = logging.getLogger(name)
        if logger.hasHandlers():
            return logger

        logger.propagate = False
        logger.setLevel(logging.DEBUG if logger_type in ("default", "pytest") else logging.INFO)
        formatter = logging.Formatter(LOG_FORMAT)

        if console:
            logger.addHandler(self._console_handler(formatter))

        if self.env in FILE_LOG_ENVS:
            logger.addHandler(self._file_handler(self._log_folder(logger_type), name, formatter))
        elif self.env in CLOUD_LOG_ENVS:
            self._add_cloudwatch_handler(logger, logger_type, formatter)

        # Never leave a logger silent
        if not logger.handlers:
            logger.addHandler(self._console_handler(formatter))

        return logger

    @lru_cache(maxsize=None)
    def get_gateway_operation_logger(self, operation: str) -> logging.Logger:
        """
        File-only logger collecting the failures of one gateway operation, e.g.
        `logs/gateway_failures/analyze_match/analyze_match_20251028_103022.log`.
        """
        operation = operation or "other"
        logger = logging.getLogger(f"gateway_{operation}")
        if logger.hasHandlers():
            return logger

        logger.setLevel(logging.INFO)
        logger.propagate = False

        folder = os.path.join(self.base_log_folder, "gateway_failures", operation)
        logger.addHandler(self._file_handler(folder, operation, logging.Formatter(LOG_FORMAT)))
        return logger

    # --------------------------------------------------------------
    # Handlers
    # --------------------------------------------------------------
    def _log_folder(self, logger_type: LoggerType) -> str:
        # Everything written during a test run lands in logs/tests
        if running_under_pytest():
            return os.path.join(self.base_log_folder, LOG_SUBFOLDERS["pytest"])
        return os.path.join(self.base_log_folder, LOG_SUBFOLDERS.get(logger_type, ""))

    @staticmethod
    def _console_handler(formatter: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        return handler

    @staticmethod
    def _file_handler(folder: str, stem: str, formatter: logging.Formatter) -> logging.Handler:
        os.makedirs(folder, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        handler = logging.FileHandler(
            os.path.join(folder, f"{stem}_{timestamp}.log"), mode="a", encoding="utf-8"
        )
        handler.setFormatter(formatter)
        return handler

    def _add_cloudwatch_handler(
        self,
        logger: logging.Logger,
        logger_type: LoggerType,
        formatter: logging.Formatter,
    ) -> None:
        try:
            import watchtower
        except ImportError:
            logger.warning("watchtower not installed, skipping cloud logging.")
            return

        handler = watchtower.CloudWatchLogHandler(log_group=cloudwatch_log_group(logger_type))
        handler.setFormatter(formatter)
        logger.addHandler(handler)
