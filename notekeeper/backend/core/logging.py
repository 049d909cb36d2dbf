"""
Logging Setup.

structlog on top of stdlib logging, configured from
config/settings/logging.yaml. Every module gets its logger from
``get_logger(__name__)``.

JSON records carry ``timestamp``, ``level``, ``logger``, ``event``,
``func_name`` and ``lineno``, plus whatever is bound in structlog
contextvars. Inside an HTTP request the middleware binds ``request_id``,
``frontend``, ``method`` and ``path``; the CLIs tag their records with
``source="cli"``.

Usage:
    from notekeeper.backend.core.logging import get_logger, setup_logging

    setup_logging()
    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": note.id})

    log_with_source(logger, "cli", "info", "Notes listed", count=3)

Log file:
    logs/system.jsonl (rotating, JSON lines)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from notekeeper.backend.core.config import find_project_root, load_yaml_config

VALID_SOURCES = frozenset({"cli", "unknown"})
"""Values allowed in the ``source`` field. Requests without a known X-Frontend-ID log as unknown."""

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx")

_logging_config: dict[str, Any] | None = None


def _get_logging_config() -> dict[str, Any]:
    """
    Load (once) and return the logging configuration from logging.yaml.

    Raises:
        FileNotFoundError: If logging.yaml does not exist
    """
    global _logging_config
    if _logging_config is None:
        _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    return find_project_root() / configured_path


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _file_handler(file_config: dict[str, Any], formatter: logging.Formatter) -> RotatingFileHandler:
    log_path = _resolve_log_path(file_config["path"])
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config["max_bytes"],
        backupCount=file_config["backup_count"],
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Arguments override the matching logging.yaml values.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: Console output format, 'json' or 'console'
        enable_console: Write to stdout
        enable_file_logging: Write JSON lines to the rotating log file
    """
    config = _get_logging_config()
    handlers_config = config["handlers"]

    if level is None:
        level = config["level"]
    if format_type is None:
        format_type = config["format"]
    if enable_console is None:
        enable_console = handlers_config["console"]["enabled"]
    if enable_file_logging is None:
        enable_file_logging = handlers_config["file"]["enabled"]

    processors = _shared_processors()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )
    if format_type == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
            foreign_pre_chain=processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if enable_file_logging:
        root_logger.addHandler(_file_handler(handlers_config["file"], json_formatter))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Return a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message tagged with an explicit source.

    For code running outside an HTTP request, such as the client CLI.

    Raises:
        ValueError: If source is not in VALID_SOURCES
        AttributeError: If level is not a log method name

    Example:
        log_with_source(logger, "cli", "info", "Notes listed", count=3)
    """
    if source not in VALID_SOURCES:
        raise ValueError(f"Unknown log source: {source}")
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
