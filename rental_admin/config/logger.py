"""Loguru setup for Rental Admin.

Console output always; when ``LOG_TO_FILE`` is on, three rotating files under
``LOG_DIR``: everything (``app.log``), errors only (``errors.log``) and one
line per HTTP request (``requests.log``).
"""

import sys
from pathlib import Path

from fastapi import Request
from loguru import logger

from rental_admin.config.settings import settings

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def _is_request_record(record) -> bool:
    return record["extra"].get("channel") == "request"


def setup_logger(log_level: str, logs_dir: str, log_to_file: bool) -> None:
    """Replace Loguru's default sink with the service's sinks."""
    logger.remove()

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True,
        diagnose=False,
    )

    if not log_to_file:
        return

    path = Path(logs_dir)
    path.mkdir(parents=True, exist_ok=True)

    logger.add(path / "app.log", format=FILE_FORMAT, level="DEBUG",
               rotation="10 MB", retention="7 days", compression="zip", encoding="utf-8")
    logger.add(path / "errors.log", format=FILE_FORMAT, level="ERROR", backtrace=True,
               rotation="5 MB", retention="30 days", compression="zip", encoding="utf-8")
    logger.add(path / "requests.log", format="{time:YYYY-MM-DD HH:mm:ss} | {message}", level="INFO",
               filter=_is_request_record,
               rotation="20 MB", retention="14 days", compression="zip", encoding="utf-8")


def _client_ip(request: Request):
    return request.client.host if request.client else None


def log_request(request: Request, status_code: int, process_time: float) -> None:
    """One access line per completed request."""
    logger.bind(channel="request").info(
        "{method} {path} -> {status_code} ({process_time:.4f}s) from {client_ip}",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        process_time=process_time,
        client_ip=_client_ip(request),
    )


def log_request_error(request: Request, error: Exception, process_time: float) -> None:
    """Request that escaped every exception handler."""
    logger.bind(channel="request").error(
        "{method} {path} failed: {error_type}: {error} ({process_time:.4f}s) from {client_ip}",
        method=request.method,
        path=request.url.path,
        error_type=type(error).__name__,
        error=str(error),
        process_time=process_time,
        client_ip=_client_ip(request),
    )


setup_logger(settings.LOG_LEVEL, settings.LOG_DIR, settings.LOG_TO_FILE)

# Export logger for use in other modules
app_logger = logger
