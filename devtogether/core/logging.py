"""
DevTogether - Logging Infrastructure

This module provides structured logging with support for:
- JSON formatted logs for production
- Console formatted logs for development
- Request id binding for tracing
- Access decision events from the policy engine
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from devtogether.core.config import get_settings

# Context variable for request tracing
request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def add_context_variables(
    logger: logging.Logger,
    method_name: str,
    event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Add the current request id to every log entry."""
    request_id = request_id_context.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def get_log_level(settings: Any) -> int:
    """Convert string log level to logging constant."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(settings.log_level.upper(), logging.INFO)


def get_processors(settings: Any) -> list[Processor]:
    """Get structlog processors based on settings."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_context_variables,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return processors


def configure_logging() -> None:
    """
    Configure structured logging for the application.

    This should be called once at application startup.
    """
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=get_log_level(settings),
    )

    structlog.configure(
        processors=get_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A structlog BoundLogger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("notification_resolved", notification_id="n-1", path="/profile")
    """
    return structlog.get_logger(name)


class LogContext:
    """
    Context manager for binding a request id to log entries.

    Example:
        >>> with LogContext(request_id="req-123"):
        ...     log.info("evaluating_route")
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id
        self._tokens: List[Token] = []

    def __enter__(self) -> "LogContext":
        if self.request_id:
            self._tokens.append(request_id_context.set(self.request_id))
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        for token in reversed(self._tokens):
            request_id_context.reset(token)
        self._tokens.clear()


class AccessLogger:
    """
    Specialized logger for policy decisions.

    Redirect and malformed-input events are the only things the
    engines report; allow decisions are too frequent to be useful.
    """

    def __init__(self, component: str):
        self.component = component
        self.log = get_logger(f"policy.{component}")

    def log_loading(self, path: str) -> None:
        """Log that a verdict was deferred until the session resolves."""
        self.log.debug("access_loading", component=self.component, path=path)

    def log_redirect(self, path: str, target: str, rule: str, reason: str) -> None:
        """Log a redirect verdict."""
        self.log.debug(
            "access_redirected",
            component=self.component,
            path=path,
            target=target,
            rule=rule,
            reason=reason,
        )

    def log_malformed_input(self, field: str, value: Any, reason: str) -> None:
        """Log input that was replaced by a safe default."""
        self.log.warning(
            "malformed_input",
            component=self.component,
            field=field,
            value=repr(value),
            reason=reason,
        )
