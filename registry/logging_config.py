"""
Structured logging configuration for the recipient registry indexer and CLI.

Provides JSON-formatted logs with trace_id support for correlating the
handling of one recipient or one registry across reconcilers.

Environment Variables:
    REGISTRY_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    REGISTRY_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from registry.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="0xabc...")
    logger.info("Recipient added")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Arguments override the environment:
    - REGISTRY_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - REGISTRY_LOG_FORMAT: json, text (default: json)
    """
    log_level = (level or os.getenv("REGISTRY_LOG_LEVEL", "INFO")).upper()
    log_format = (log_format or os.getenv("REGISTRY_LOG_FORMAT", "json")).lower()

    # Map string log level to logging constant
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    resolved = level_map.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stderr keeps --json command output on stdout clean
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(TraceIDFilter())

    if log_format == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (recipient id or registry address)

    Example:
        logger = get_logger(__name__, trace_id="0xabc...")
        logger.info("Recipient removed")
        # Output (JSON): {"timestamp": "...", "level": "INFO", "message": "Recipient removed", "trace_id": "0xabc..."}
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True
