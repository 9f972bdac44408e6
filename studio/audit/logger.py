"""
Audit Logger

DESIGN DECISION: Every mutation of the studio's state is logged.
This provides:
1. Traceability of what changed and when
2. Debugging capability
3. The only visible trace of a failed storage write

The audit logger:
- Is synchronous, like every operation in the app
- Never raises: logging must not break the main flow
- Keeps a bounded list of recent events for the settings page
"""

import logging
from collections import deque
from typing import Optional

import structlog

from studio.models.audit import AuditEvent, AuditEventBuilder, AuditEventType, AuditSeverity


def configure_logging(level: str = "INFO") -> None:
    """
    Configure stdlib logging and structlog.

    Safe to call more than once; the last call wins.
    """
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory list of recent events (for the UI)
    """

    def __init__(self, recent_limit: int = 50):
        """
        Initialize audit logger.

        Args:
            recent_limit: How many events to keep in memory.
                          Zero disables the recent-events list.
        """
        self._recent: deque[AuditEvent] = deque(maxlen=recent_limit)
        self._logger = structlog.get_logger("studio.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and remember it."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._recent.maxlen:
            self._recent.append(event)

    def recent_events(self, limit: Optional[int] = None) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(reversed(self._recent))
        if limit is not None:
            return events[:limit]
        return events

    # -------------------------------------------------------------------------
    # Convenience wrappers
    # -------------------------------------------------------------------------

    def log_transaction_added(self, transaction) -> None:
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction.id,
            description=transaction.description,
            amount=transaction.amount,
            kind=transaction.type.value,
        ))

    def log_appointment_event(self, event_type: AuditEventType, appointment) -> None:
        self.log(AuditEventBuilder.appointment_changed(
            event_type=event_type,
            appointment_id=appointment.id,
            client_name=appointment.client_name,
            service=appointment.service,
        ))

    def log_client_event(self, event_type: AuditEventType, client) -> None:
        self.log(AuditEventBuilder.client_changed(
            event_type=event_type,
            client_id=client.id,
            name=client.name,
        ))

    def log_not_found(self, entity_type: str, entity_id, operation: str) -> None:
        self.log(AuditEventBuilder.record_not_found(
            entity_type=entity_type,
            entity_id=entity_id,
            operation=operation,
        ))

    def log_load_failed(self, collection: str, error: Exception) -> None:
        self.log(AuditEventBuilder.storage_load_failed(collection, str(error)))

    def log_save_failed(self, collection: str, error: Exception) -> None:
        self.log(AuditEventBuilder.storage_save_failed(collection, str(error)))
