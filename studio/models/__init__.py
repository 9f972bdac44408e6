"""
Data Models Package

This package contains all Pydantic models used in Studio Manager.
All data held in memory or written to storage conforms to these schemas.
"""

from studio.models.records import (
    Appointment,
    AppointmentStatus,
    Client,
    StudioRecord,
    Transaction,
    TransactionType,
    collation_key,
    name_key,
)
from studio.models.state import StudioState
from studio.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Records
    "Appointment",
    "AppointmentStatus",
    "Client",
    "StudioRecord",
    "Transaction",
    "TransactionType",
    "collation_key",
    "name_key",
    # State
    "StudioState",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
