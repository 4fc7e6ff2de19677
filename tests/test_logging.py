"""Tests for structured and audit logging."""

import logging

import pytest

from app.core.logging import StructuredFormatter, audit_logger, redact


def test_structured_formatter_renders_context_fields() -> None:
    record = logging.LogRecord("audit", logging.INFO, __file__, 1, "booking created", None, None)
    record.action = "booking_created"
    record.entity_id = "b-1"

    line = StructuredFormatter().format(record)

    assert "level=INFO" in line
    assert "message=booking created" in line
    assert "action=booking_created" in line
    assert "entity_id=b-1" in line
    assert "user_id=" not in line


def test_redact_drops_credentials() -> None:
    assert redact({"password": "secret", "token": "t", "user_id": "u-1"}) == {"user_id": "u-1"}
    assert redact(None) == {}


def test_audit_logger_attaches_actor_and_entity(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="audit"):
        audit_logger.log(
            action="booking_deleted",
            actor_role="admin",
            actor_id="a-1",
            entity_type="booking",
            entity_id="b-1",
            metadata={"password": "never-logged"},
        )

    record = caplog.records[-1]
    assert record.name == "audit"
    assert record.action == "booking_deleted"
    assert record.user_id == "a-1"
    assert record.entity_type == "booking"
    assert "never-logged" not in record.getMessage()
