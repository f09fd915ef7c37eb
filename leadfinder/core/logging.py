"""
Structured logging helpers on top of Loguru.

Every record emitted through StructuredLogger carries the current request id
(set by the HTTP middleware) so log lines from concurrent searches can be
told apart.
"""

from loguru import logger
from contextvars import ContextVar
from typing import Optional
import json
import sys
from functools import wraps
import asyncio
import time

# Set per HTTP request by the app middleware; None for CLI runs
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class StructuredLogger:
    """Loguru wrapper that binds the request id and drops empty fields"""

    @staticmethod
    def bind(**kwargs):
        context = {"request_id": request_id_var.get(), **kwargs}
        return logger.bind(**{k: v for k, v in context.items() if v is not None})

    @staticmethod
    def info(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).info(message)

    @staticmethod
    def error(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).error(message)

    @staticmethod
    def warning(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).warning(message)

    @staticmethod
    def debug(message: str, **kwargs):
        StructuredLogger.bind(**kwargs).debug(message)


def _log_timing(name: str, started: float, error: Optional[Exception] = None):
    duration = round(time.monotonic() - started, 3)
    if error is None:
        StructuredLogger.info(f"{name} finished", operation=name, duration=duration, status="success")
    else:
        StructuredLogger.error(
            f"{name} failed",
            operation=name,
            duration=duration,
            status="error",
            error_type=type(error).__name__,
            error=str(error),
        )


def log_execution_time(func):
    """Decorator logging how long a pipeline operation took and whether it failed.

    Works on both coroutines and plain functions. Exceptions are re-raised.
    """
    name = func.__qualname__

    if asyncio.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            started = time.monotonic()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_timing(name, started, e)
                raise
            _log_timing(name, started)
            return result

        return async_wrapper

    @wraps(func)
    def sync_wrapper(*args, **kwargs):
        started = time.monotonic()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _log_timing(name, started, e)
            raise
        _log_timing(name, started)
        return result

    return sync_wrapper


def log_http_request(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    **kwargs,
):
    """Log an outbound HTTP call. Pass the URL without credentials."""
    log_data = {"method": method, "url": url, "type": "http_request", **kwargs}

    if status_code:
        log_data["status_code"] = status_code

    if duration:
        log_data["duration"] = round(duration, 3)

    if status_code and status_code >= 400:
        StructuredLogger.warning("HTTP request failed", **log_data)
    else:
        StructuredLogger.debug("HTTP request completed", **log_data)


def log_search_summary(locale: str, mode: str, **counts: int):
    """One line per search with the filter counters, for dashboards."""
    StructuredLogger.info(
        "Lead search summary", type="lead_search", locale=locale, mode=mode, **counts
    )


def json_formatter(record) -> str:
    """Render a record as one JSON line"""
    line = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
    }
    line.update({k: v for k, v in record["extra"].items() if not k.startswith("_")})

    if record["exception"]:
        line["exception"] = str(record["exception"])

    # Stash the line so loguru's template doesn't try to format braces in it
    record["extra"]["_json"] = json.dumps(line, default=str, ensure_ascii=False)
    return "{extra[_json]}\n"


def setup_json_logging(level: str = "INFO"):
    """Send JSON lines to stdout instead of the human-readable format"""
    logger.remove()
    logger.add(sys.stdout, format=json_formatter, level=level, serialize=False)


__all__ = [
    "logger",
    "StructuredLogger",
    "log_execution_time",
    "log_http_request",
    "log_search_summary",
    "setup_json_logging",
    "request_id_var",
]
