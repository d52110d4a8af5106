"""
Body-safe logging module.
CRITICAL: Never log request-body values. They routinely carry credentials,
emails and other personal data. Only key names, counts and codes are logged.
"""
import logging
import sys
from typing import Any, Optional

from sanitized.core.config import get_settings


def setup_logging() -> None:
    """Configure library logging for host applications that have none."""
    settings = get_settings()

    log_level = logging.DEBUG if settings.service_env == "dev" else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )


class SafeLogger:
    """
    Body-safe logger wrapper.
    Context keyword arguments outside SAFE_FIELDS are silently discarded.
    """

    SAFE_FIELDS = frozenset({
        "model",
        "operation",
        "error_code",
        "status_code",
        "request_id",
        "method",
        "path",
        "permitted_count",
        "dropped_count",
        "dropped_keys",
    })

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _format_safe_context(self, context: dict[str, Any]) -> str:
        """Format only safe fields from context."""
        safe_items = []
        for key, value in context.items():
            if key in self.SAFE_FIELDS:
                safe_items.append(f"{key}={value}")
        return " | ".join(safe_items) if safe_items else ""

    def _compose(self, message: str, context: dict[str, Any]) -> str:
        ctx = self._format_safe_context(context)
        return f"{message} | {ctx}" if ctx else message

    def info(self, message: str, **context: Any) -> None:
        self._logger.info(self._compose(message, context))

    def warning(self, message: str, **context: Any) -> None:
        self._logger.warning(self._compose(message, context))

    def error(
        self,
        message: str,
        error_code: Optional[str] = None,
        **context: Any
    ) -> None:
        """
        Log error with safe context only.
        NEVER log exception details; constructor errors may echo input values.
        """
        if error_code:
            context["error_code"] = error_code
        self._logger.error(self._compose(message, context))

    def debug(self, message: str, **context: Any) -> None:
        # Skip formatting when debug is off
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._compose(message, context))


def get_safe_logger(name: str) -> SafeLogger:
    """Get a body-safe logger instance."""
    return SafeLogger(name)
