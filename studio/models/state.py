"""
Application State

The whole studio lives in one StudioState object: three collections
held in memory for the lifetime of the process. Operations receive the
state by reference, mutate it, then ask the state store to persist the
collections they touched.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from studio.models.records import (
    Appointment,
    Client,
    Transaction,
    collation_key,
)


class StudioState(BaseModel):
    """In-memory state of the studio."""

    transactions: list[Transaction] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)
    clients: list[Client] = Field(default_factory=list)

    def find_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    def find_appointment(self, appointment_id: UUID) -> Optional[Appointment]:
        return next((a for a in self.appointments if a.id == appointment_id), None)

    def find_client(self, client_id: UUID) -> Optional[Client]:
        return next((c for c in self.clients if c.id == client_id), None)

    def sort_transactions(self) -> None:
        """Newest first. Python's sort is stable, so equal dates keep insertion order."""
        self.transactions.sort(key=lambda t: t.date, reverse=True)

    def sort_appointments(self) -> None:
        self.appointments.sort(key=lambda a: a.starts_at)

    def sort_clients(self) -> None:
        self.clients.sort(key=lambda c: collation_key(c.name))
