"""
Structured logging for index and state store operations.
Progress, rejections and state changes are written as single-line records.
"""

import logging
from typing import Any, Dict

from ..core.config import LOG_LEVEL


def truncate(value: str, limit: int = 50) -> str:
    """Shorten long values before they reach the log."""
    return value[:limit] + "..." if len(value) > limit else value


class StructuredLogger:
    """Structured logger for vector index and named store operations."""

    def __init__(self, name: str = "agent_memory", level: str = LOG_LEVEL):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level, logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status in ("failed", "rejected"):
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def log_vector_operation(self, operation: str, record_id: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a vector index operation."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)

        self.log_operation(f"rag.{operation}", status, log_details)

    def log_state_operation(self, store_name: str, message: str, status: str = "success"):
        """Log a named store mutation, e.g. '<goals> key=value'."""
        self.log_operation(f"state.{store_name}", status, {"change": f"<{store_name}> {message}"})

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
