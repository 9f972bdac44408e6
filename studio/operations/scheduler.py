"""
Appointment Scheduler

Books, edits, deletes and closes appointments.

Completing an appointment is the one operation that crosses
collections. In a single synchronous call it:
1. Appends an income transaction for the service price
2. Credits the client (creating the client if needed)
3. Marks the appointment completed
and then writes the three collections back to storage.
"""

from datetime import date, time
from typing import Optional, Union
from uuid import UUID

from studio.audit import AuditLogger
from studio.models.audit import AuditEventType
from studio.models.records import (
    Appointment,
    AppointmentStatus,
    Transaction,
    TransactionType,
)
from studio.models.state import StudioState
from studio.operations.ledger import TransactionLedger
from studio.operations.roster import ClientRoster
from studio.queries import views
from studio.services.storage import StateStore


# Statuses accepted by set_status()
CLOSING_STATUSES = (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELED)


def income_description(appointment: Appointment) -> str:
    """Ledger description for a completed appointment."""
    return f"Serviço: {appointment.service} - {appointment.client_name}"


class AppointmentScheduler:
    """Keeps appointments sorted by date and time."""

    def __init__(
        self,
        state: StudioState,
        store: StateStore,
        ledger: TransactionLedger,
        roster: ClientRoster,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._state = state
        self._store = store
        self._ledger = ledger
        self._roster = roster
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def appointments(self) -> list[Appointment]:
        return self._state.appointments

    def add(
        self,
        client_name: str,
        service: str,
        date: date,
        time: time,
        price: float,
    ) -> Appointment:
        """Book a new appointment. Status always starts as scheduled."""
        appointment = Appointment(
            client_name=client_name,
            service=service,
            date=date,
            time=time,
            price=price,
            status=AppointmentStatus.SCHEDULED,
        )
        self._state.appointments.append(appointment)
        self._state.sort_appointments()
        self._store.save_appointments(self._state)
        self._audit_logger.log_appointment_event(AuditEventType.APPOINTMENT_ADDED, appointment)
        return appointment

    def update(self, appointment: Appointment) -> Optional[Appointment]:
        """
        Replace the stored appointment with the same id.

        No transition rules are enforced here, and the client's counter
        is not touched.

        Raises:
            ValidationError: If the edited record is invalid (e.g. blank name)
        """
        appointment = Appointment.model_validate(appointment.model_dump())
        for index, existing in enumerate(self._state.appointments):
            if existing.id == appointment.id:
                self._state.appointments[index] = appointment
                break
        else:
            self._audit_logger.log_not_found("appointment", appointment.id, "update")
            return None

        self._state.sort_appointments()
        self._store.save_appointments(self._state)
        self._audit_logger.log_appointment_event(AuditEventType.APPOINTMENT_UPDATED, appointment)
        return appointment

    def delete(self, appointment_id: UUID) -> bool:
        """Remove an appointment. Unknown ids are ignored."""
        appointment = self._state.find_appointment(appointment_id)
        if appointment is None:
            self._audit_logger.log_not_found("appointment", appointment_id, "delete")
            return False

        self._state.appointments.remove(appointment)
        self._store.save_appointments(self._state)
        self._audit_logger.log_appointment_event(AuditEventType.APPOINTMENT_DELETED, appointment)
        return True

    def set_status(
        self,
        appointment_id: UUID,
        status: Union[AppointmentStatus, str],
    ) -> Optional[Appointment]:
        """
        Complete or cancel an appointment.

        Completing an appointment that is not already completed records
        the income and credits the client. Completing it again is a
        status-only change.

        Raises:
            ValueError: If status is not completed or canceled
        """
        status = AppointmentStatus(status)
        if status not in CLOSING_STATUSES:
            raise ValueError(f"Cannot set appointment status to {status.value}")

        index, appointment = next(
            ((i, a) for i, a in enumerate(self._state.appointments) if a.id == appointment_id),
            (None, None),
        )
        if appointment is None:
            self._audit_logger.log_not_found("appointment", appointment_id, "set_status")
            return None

        changes: dict = {"status": status}
        completing = (
            status == AppointmentStatus.COMPLETED
            and appointment.status != AppointmentStatus.COMPLETED
        )
        if completing:
            # Both records are validated before either collection changes
            income = Transaction(
                description=income_description(appointment),
                amount=appointment.price,
                type=TransactionType.INCOME,
                date=appointment.date,
            )
            client = self._roster.credit_completion(appointment)
            self._ledger.post(income)
            changes["client_id"] = client.id

        updated = appointment.model_copy(update=changes)
        self._state.appointments[index] = updated

        if completing:
            self._store.save(self._state, "transactions", "clients", "appointments")
        else:
            self._store.save_appointments(self._state)

        event_type = (
            AuditEventType.APPOINTMENT_COMPLETED
            if status == AppointmentStatus.COMPLETED
            else AuditEventType.APPOINTMENT_CANCELED
        )
        self._audit_logger.log_appointment_event(event_type, updated)
        return updated

    def complete(self, appointment_id: UUID) -> Optional[Appointment]:
        return self.set_status(appointment_id, AppointmentStatus.COMPLETED)

    def cancel(self, appointment_id: UUID) -> Optional[Appointment]:
        return self.set_status(appointment_id, AppointmentStatus.CANCELED)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def upcoming(self) -> list[Appointment]:
        return views.upcoming_appointments(self._state.appointments)

    def history(self) -> list[Appointment]:
        return views.appointment_history(self._state.appointments)

    def on_date(self, day: date) -> list[Appointment]:
        return views.appointments_on(self._state.appointments, day)
