"""Logging setup for the Forja domains.

Every module logs through ``structlog.get_logger(__name__)``. Records are
handed to the standard library, which writes them to stdout and to two
rotating files under ``LOG_DIR``: ``forja.log`` for everything at the
configured level and ``forja_error.log`` for errors only.

Production and staging render JSON lines; other environments get the
coloured console renderer with rich tracebacks.
"""

import logging
import logging.handlers
import os
import sys
from contextlib import contextmanager
from pathlib import Path

import structlog

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))
LOG_FILE_PREFIX = "forja"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_STRUCTURED_ENVIRONMENTS = {"production", "staging"}

# Libraries that are chatty at INFO
_QUIET_LOGGERS = ("protean", "asyncio", "sqlalchemy.engine", "uvicorn.access")


def current_environment() -> str:
    for variable in ("ENV", "ENVIRONMENT", "PROTEAN_ENV"):
        value = os.getenv(variable)
        if value:
            return value.lower()
    return "development"


def log_level_for(environment: str) -> str:
    """``LOG_LEVEL`` wins; otherwise the level follows the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(environment, "INFO")).upper()


def _rotating_file(name: str, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=LOG_DIR / name,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _install_handlers(level: str) -> None:
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(f"{LOG_FILE_PREFIX}.log", level),
        _rotating_file(f"{LOG_FILE_PREFIX}_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in _STRUCTURED_ENVIRONMENTS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def _configure_structlog(environment: str) -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            _renderer(environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


_configured = False


def configure_logging() -> None:
    """Configure stdlib handlers and structlog once per process.

    Each domain module calls this on import, so later calls are no-ops.
    """
    global _configured
    if _configured:
        return

    environment = current_environment()
    _install_handlers(log_level_for(environment))
    _configure_structlog(environment)
    _configured = True


@contextmanager
def request_context(**values):
    """Bind ``values`` to every log line emitted inside the block."""
    tokens = structlog.contextvars.bind_contextvars(**values)
    try:
        yield
    finally:
        structlog.contextvars.reset_contextvars(**tokens)
