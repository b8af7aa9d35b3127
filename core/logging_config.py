# core/logging_config.py

import logging
import os
from datetime import datetime
from logging import Logger, StreamHandler
from logging.handlers import TimedRotatingFileHandler

from colorlog import ColoredFormatter
from pythonjsonlogger.json import JsonFormatter

from core.request_context import current_request_path

# === Logging Setup Configuration ===
APPLICATION_NAME = os.getenv("APP_NAME", "Roleboard API").replace(" ", "_")
APP_ENV = os.getenv("APP_ENV", "local").lower()  # "local" or "cloud"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

LOG_DIR = "logs"
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE_PATH = os.path.join(
    LOG_DIR,
    f"{APPLICATION_NAME}_{datetime.now().strftime('%Y%m%d')}.log",
)

JSON_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(request_path)s %(message)s "
    "%(pathname)s %(lineno)d"
)
CONSOLE_FORMAT = (
    "%(log_color)s%(asctime)s | %(levelname)-8s | %(name)s | %(request_path)s | "
    "%(filename)s:%(lineno)d | %(message)s%(reset)s"
)


class RequestPathFilter(logging.Filter):
    """Stamps every record with the path of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_path = current_request_path() or "-"
        return True


def _file_handler(formatter: logging.Formatter) -> TimedRotatingFileHandler:
    handler = TimedRotatingFileHandler(
        filename=LOG_FILE_PATH, when="midnight", backupCount=7, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    handler.addFilter(RequestPathFilter())
    return handler


def _console_handler() -> StreamHandler:
    handler = StreamHandler()
    if APP_ENV == "local":
        handler.setFormatter(
            ColoredFormatter(
                CONSOLE_FORMAT,
                datefmt="%Y-%m-%d %H:%M:%S",
                reset=True,
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "bold_red",
                },
            )
        )
    else:
        handler.setFormatter(JsonFormatter(JSON_FORMAT))
    handler.addFilter(RequestPathFilter())
    return handler


def setup_logging() -> None:
    """Configures the root logger: colour console locally, JSON in cloud/docker."""
    logging.basicConfig(
        level=logging.DEBUG if APP_ENV == "local" else logging.INFO,
        handlers=[_file_handler(JsonFormatter(JSON_FORMAT)), _console_handler()],
    )

    # uvicorn access lines duplicate the request logging middleware
    logging.getLogger("uvicorn.access").disabled = True

    logging.info(f"Logging initialized for environment: {APP_ENV.upper()}")


# === Reusable Logger Factory ===
def get_logger(name: str) -> Logger:
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger  # Prevent duplicate handlers

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.DEBUG))
    logger.addHandler(_console_handler())
    logger.addHandler(_file_handler(JsonFormatter(JSON_FORMAT)))

    logger.propagate = False  # Prevent duplicate logs in root

    return logger
