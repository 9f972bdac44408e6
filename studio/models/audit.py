"""
Audit Models for Studio Manager

Every mutation of the studio's state produces one audit event:
1. A structured log line for debugging
2. An entry in the recent-activity list shown on the settings page

Storage failures are audit events too. They are the only place where
a failed write ever becomes visible.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_DELETED = "transaction_deleted"

    # Scheduling
    APPOINTMENT_ADDED = "appointment_added"
    APPOINTMENT_UPDATED = "appointment_updated"
    APPOINTMENT_DELETED = "appointment_deleted"
    APPOINTMENT_COMPLETED = "appointment_completed"
    APPOINTMENT_CANCELED = "appointment_canceled"

    # Roster
    CLIENT_ADDED = "client_added"
    CLIENT_UPDATED = "client_updated"
    CLIENT_DELETED = "client_deleted"
    CLIENT_CREDITED = "client_credited"

    # Lookups that found nothing
    RECORD_NOT_FOUND = "record_not_found"

    # Persistence
    STATE_LOADED = "state_loaded"
    STORAGE_LOAD_FAILED = "storage_load_failed"
    STORAGE_SAVE_FAILED = "storage_save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the activity trail.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (transaction, appointment, client, collection)"
    )
    entity_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def truncate_description(cls, v):
        # Free-text record fields can be longer than the log line allows
        if isinstance(v, str) and len(v) > 500:
            return v[:497] + "..."
        return v

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_deleted(transaction.id)
        event = AuditEventBuilder.storage_save_failed("clients", error)
    """

    @staticmethod
    def transaction_added(transaction_id: UUID, description: str, amount: float, kind: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            description=f"Transaction added: {description}",
            details={"amount": amount, "type": kind},
        )

    @staticmethod
    def transaction_deleted(transaction_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            description="Transaction deleted",
        )

    @staticmethod
    def appointment_changed(
        event_type: AuditEventType,
        appointment_id: UUID,
        client_name: str,
        service: str,
    ) -> AuditEvent:
        verb = event_type.value.removeprefix("appointment_")
        return AuditEvent(
            event_type=event_type,
            entity_type="appointment",
            entity_id=appointment_id,
            description=f"Appointment {verb}: {service} - {client_name}",
            details={"client_name": client_name, "service": service},
        )

    @staticmethod
    def client_changed(event_type: AuditEventType, client_id: UUID, name: str) -> AuditEvent:
        verb = event_type.value.removeprefix("client_")
        return AuditEvent(
            event_type=event_type,
            entity_type="client",
            entity_id=client_id,
            description=f"Client {verb}: {name}",
            details={"name": name},
        )

    @staticmethod
    def client_credited(client_id: UUID, name: str, completed: int, created: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CLIENT_CREDITED,
            entity_type="client",
            entity_id=client_id,
            description=f"Completed appointment credited to {name} ({completed} total)",
            details={
                "completed_appointments": completed,
                "created": created,
            },
        )

    @staticmethod
    def record_not_found(entity_type: str, entity_id: UUID, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_NOT_FOUND,
            severity=AuditSeverity.DEBUG,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{operation} ignored: {entity_type} not found",
            details={"operation": operation},
        )

    @staticmethod
    def state_loaded(counts: dict[str, int]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STATE_LOADED,
            entity_type="collection",
            description="State loaded from storage",
            details=counts,
        )

    @staticmethod
    def storage_load_failed(collection: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="collection",
            description=f"Failed to load {collection}; starting with an empty list",
            details={"collection": collection},
            error_message=error_message,
        )

    @staticmethod
    def storage_save_failed(collection: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="collection",
            description=f"Failed to save {collection}",
            details={"collection": collection},
            error_message=error_message,
        )
