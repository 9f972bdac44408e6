"""
Core Records for Studio Manager

Three kinds of record live in the studio's state:
1. Transaction - one line of the income/expense ledger
2. Appointment - one scheduled service for a client
3. Client - one person on the roster

DESIGN DECISION: The persisted shape mirrors the records one to one.
Field names are snake_case in Python and camelCase on disk
(clientName, completedAppointments), so stored data keeps the same
layout across versions of the app.
"""

import datetime as dt
import unicodedata
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a ledger entry."""
    INCOME = "income"
    EXPENSE = "expense"


class AppointmentStatus(str, Enum):
    """
    Appointment lifecycle status.

    New appointments are always SCHEDULED. In practice they move once,
    to COMPLETED or CANCELED.
    """
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELED = "canceled"


class StudioRecord(BaseModel):
    """Shared configuration for every persisted record."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique record identifier (UUID4, never reassigned)"
    )

    def to_storage_dict(self) -> dict:
        """Serialize with the on-disk (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# LEDGER
# =============================================================================

class Transaction(StudioRecord):
    """
    A single income or expense entry.

    Transactions are immutable once created: the ledger only adds and
    deletes them.
    """

    description: str = Field(
        ...,
        description="Free text description"
    )
    amount: float = Field(
        ...,
        ge=0,
        description="Amount in currency units (sign comes from type)"
    )
    type: TransactionType = Field(
        ...,
        description="income or expense"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the entry"
    )

    @property
    def signed_amount(self) -> float:
        """Amount with the sign implied by the transaction type."""
        if self.type == TransactionType.EXPENSE:
            return -self.amount
        return self.amount


# =============================================================================
# SCHEDULING
# =============================================================================

class Appointment(StudioRecord):
    """
    A service booked for a client at a date and time.

    client_name is a soft link to Client.name (case-insensitive).
    client_id is stamped when the appointment is completed so the client's
    history survives a later rename.
    """

    client_name: str = Field(
        ...,
        min_length=1,
        description="Client name as typed when booking"
    )
    service: str = Field(
        ...,
        min_length=1,
        description="Service to perform"
    )
    date: dt.date
    time: dt.time = Field(
        ...,
        description="Local wall-clock time, no timezone"
    )
    price: float = Field(
        ...,
        ge=0,
        description="Price charged for the service"
    )
    status: AppointmentStatus = Field(
        default=AppointmentStatus.SCHEDULED,
    )
    client_id: Optional[UUID] = Field(
        default=None,
        description="Client the completion was credited to"
    )

    @field_serializer("time", when_used="json")
    def serialize_time(self, value: dt.time) -> str:
        return value.strftime("%H:%M")

    @property
    def starts_at(self) -> dt.datetime:
        """Date and time combined, used for ordering."""
        return dt.datetime.combine(self.date, self.time)

    @property
    def is_scheduled(self) -> bool:
        return self.status == AppointmentStatus.SCHEDULED


# =============================================================================
# CLIENTS
# =============================================================================

class Client(StudioRecord):
    """
    A client on the roster.

    completed_appointments is maintained by the scheduler when an
    appointment is completed. The forms never edit it directly.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Client name"
    )
    phone: Optional[str] = Field(
        default="",
        description="Contact phone (optional)"
    )
    notes: Optional[str] = Field(
        default="",
        description="Free text notes (optional)"
    )
    completed_appointments: int = Field(
        default=0,
        ge=0,
        description="Number of completed appointments credited to this client"
    )

    def matches_name(self, name: str) -> bool:
        """Case-insensitive comparison used for the appointment soft link."""
        return name_key(self.name) == name_key(name)


def name_key(name: str) -> str:
    """Normalized form of a name for case-insensitive matching."""
    return name.strip().casefold()


def collation_key(name: str) -> tuple[str, str]:
    """
    Sort key approximating a pt-BR locale comparison.

    Accents and case are ignored at the first level ("Ágata" sorts
    next to "Agata"); the original text breaks ties.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name)
