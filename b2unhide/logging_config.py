"""Structured logging configuration."""

import logging
import sys
from pathlib import Path

import structlog

HANDLER_NAME = "b2unhide"


def remove_handlers() -> None:
    """Detach handlers installed by a previous configure_logging call."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path | None = None,
    format_type: str = "console",
) -> structlog.BoundLogger:
    """Configure structured logging with stderr and optional file output.
    
    Diagnostics go to stderr; stdout is reserved for the tool's results
    and dry-run command lines.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (JSON format)
        format_type: 'console' for human-readable, 'json' for structured
        
    Returns:
        Configured structlog logger
    """
    level = getattr(logging, log_level.upper())
    
    # Ensure log directory exists
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    
    # Structlog processors
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    
    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    
    if format_type == "json":
        console_renderer = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                console_renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )
    handlers: list[logging.Handler] = [console_handler]
    
    # Add file handler for JSON logs if specified
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.dict_tracebacks,
                    structlog.processors.JSONRenderer(),
                ],
                foreign_pre_chain=shared_processors,
            )
        )
        handlers.append(file_handler)
    
    remove_handlers()
    root = logging.getLogger()
    for handler in handlers:
        handler.set_name(HANDLER_NAME)
        handler.setLevel(level)
        root.addHandler(handler)
    root.setLevel(level)
    
    return structlog.get_logger()
