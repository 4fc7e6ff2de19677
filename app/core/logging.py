"""Structured logging configuration."""

import logging
import sys
from typing import Any

from app.core.config import settings

# Record attributes rendered by StructuredFormatter when a call passes them via ``extra``
CONTEXT_FIELDS = ("action", "actor_role", "user_id", "entity_type", "entity_id")

# Metadata keys never written to the audit trail
REDACTED_KEYS = frozenset({"password", "hashed_password", "token"})


class StructuredFormatter(logging.Formatter):
    """key=value formatter for non-dev environments."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return " ".join(f"{k}={v}" for k, v in log_data.items())


def setup_logging() -> None:
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if settings.is_dev:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = StructuredFormatter()

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    # The audit trail stays on even when the app runs at WARNING
    logging.getLogger("audit").setLevel(logging.INFO)


def redact(metadata: dict[str, Any] | None) -> dict[str, Any]:
    """Drop credential-like keys from audit metadata."""
    return {k: v for k, v in (metadata or {}).items() if k not in REDACTED_KEYS}


class AuditLogger:
    """Logger for booking and account mutations.

    Entries go to the ``audit`` logger with the actor and entity attached as
    record attributes, so the structured formatter emits them as fields.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("audit")

    def log(
        self,
        action: str,
        actor_role: str,
        actor_id: str | None,
        entity_type: str,
        entity_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Log an audit event."""
        self.logger.info(
            f"AUDIT: {action} {entity_type}:{entity_id} metadata={redact(metadata)}",
            extra={
                "action": action,
                "actor_role": actor_role,
                "user_id": actor_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
            },
        )


audit_logger = AuditLogger()
