"""Tests for the audit logger."""

from uuid import uuid4

from studio.audit import AuditLogger, configure_logging
from studio.models.audit import AuditEventBuilder, AuditEventType, AuditSeverity


class TestAuditLogger:
    """Tests for the recent-events buffer and severity routing."""

    def test_recent_events_newest_first(self, audit_logger):
        """Test ordering of the in-memory list."""
        first = AuditEventBuilder.transaction_deleted(uuid4())
        second = AuditEventBuilder.record_not_found("appointment", uuid4(), "delete")
        audit_logger.log(first)
        audit_logger.log(second)

        assert audit_logger.recent_events() == [second, first]
        assert audit_logger.recent_events(limit=1) == [second]

    def test_recent_events_bounded(self):
        """Test that old events fall off."""
        audit_logger = AuditLogger(recent_limit=2)
        for _ in range(5):
            audit_logger.log(AuditEventBuilder.transaction_deleted(uuid4()))
        assert len(audit_logger.recent_events()) == 2

    def test_zero_limit_keeps_nothing(self):
        """Test that the list can be disabled."""
        audit_logger = AuditLogger(recent_limit=0)
        audit_logger.log(AuditEventBuilder.transaction_deleted(uuid4()))
        assert audit_logger.recent_events() == []

    def test_error_events_are_logged(self, audit_logger):
        """Test that storage failures go through the logger as errors."""
        audit_logger.log_save_failed("clients", OSError("disk full"))

        event = audit_logger.recent_events()[0]
        assert event.event_type == AuditEventType.STORAGE_SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"

    def test_configure_logging_is_repeatable(self, audit_logger):
        """Test that logging can be configured more than once."""
        configure_logging("DEBUG")
        configure_logging("warning")
        audit_logger.log(AuditEventBuilder.record_not_found("client", uuid4(), "delete"))
        assert audit_logger.recent_events()[0].event_type == AuditEventType.RECORD_NOT_FOUND


class TestOperationAudit:
    """Tests that operations leave audit events."""

    def test_completion_events(self, studio, ana_manicure):
        """Test the events emitted by completing an appointment."""
        studio.scheduler.complete(ana_manicure.id)

        types = [e.event_type for e in studio.audit_logger.recent_events(limit=3)]
        assert types == [
            AuditEventType.APPOINTMENT_COMPLETED,
            AuditEventType.TRANSACTION_ADDED,
            AuditEventType.CLIENT_CREDITED,
        ]

    def test_state_loaded_on_startup(self, studio):
        """Test that loading the state is recorded."""
        events = studio.audit_logger.recent_events()
        assert events[-1].event_type == AuditEventType.STATE_LOADED
