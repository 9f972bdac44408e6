"""
Client Roster

Clients sorted by name. The completed-appointments counter is only
changed through credit_completion(), which the scheduler calls when an
appointment is completed.
"""

from typing import Optional
from uuid import UUID

from studio.audit import AuditLogger
from studio.models.audit import AuditEventBuilder, AuditEventType
from studio.models.records import Appointment, Client
from studio.models.state import StudioState
from studio.queries.views import client_history
from studio.services.storage import StateStore


class ClientRoster:
    """Adds, updates and deletes clients; credits completed appointments."""

    def __init__(
        self,
        state: StudioState,
        store: StateStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._state = state
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def clients(self) -> list[Client]:
        return self._state.clients

    def add(self, name: str, phone: str = "", notes: str = "") -> Client:
        """Register a new client with no completed appointments."""
        client = Client(name=name, phone=phone, notes=notes, completed_appointments=0)
        self._state.clients.append(client)
        self._state.sort_clients()
        self._store.save_clients(self._state)
        self._audit_logger.log_client_event(AuditEventType.CLIENT_ADDED, client)
        return client

    def update(self, client: Client) -> Optional[Client]:
        """
        Replace the stored client with the same id.

        Renaming a client does not relink appointments booked under the
        old name.

        Raises:
            ValidationError: If the edited record is invalid (e.g. blank name)
        """
        client = Client.model_validate(client.model_dump())
        for index, existing in enumerate(self._state.clients):
            if existing.id == client.id:
                self._state.clients[index] = client
                break
        else:
            self._audit_logger.log_not_found("client", client.id, "update")
            return None

        self._state.sort_clients()
        self._store.save_clients(self._state)
        self._audit_logger.log_client_event(AuditEventType.CLIENT_UPDATED, client)
        return client

    def delete(self, client_id: UUID) -> bool:
        """Remove a client. Appointments booked under that name are untouched."""
        client = self._state.find_client(client_id)
        if client is None:
            self._audit_logger.log_not_found("client", client_id, "delete")
            return False

        self._state.clients.remove(client)
        self._store.save_clients(self._state)
        self._audit_logger.log_client_event(AuditEventType.CLIENT_DELETED, client)
        return True

    def find_by_name(self, name: str) -> Optional[Client]:
        """First client whose name matches case-insensitively."""
        return next((c for c in self._state.clients if c.matches_name(name)), None)

    def credit_completion(self, appointment: Appointment) -> Client:
        """
        Count one completed appointment for the appointment's client.

        The client is looked up by the appointment's client_id when set,
        then by name. A missing client is created with a count of one.
        Does not persist; the scheduler saves once it has finished.
        """
        client = None
        if appointment.client_id is not None:
            client = self._state.find_client(appointment.client_id)
        if client is None:
            client = self.find_by_name(appointment.client_name)

        if client is not None:
            credited = client.model_copy(
                update={"completed_appointments": client.completed_appointments + 1}
            )
            index = self._state.clients.index(client)
            self._state.clients[index] = credited
            created = False
        else:
            credited = Client(
                name=appointment.client_name,
                phone="",
                notes="",
                completed_appointments=1,
            )
            self._state.clients.append(credited)
            self._state.sort_clients()
            created = True

        self._audit_logger.log(AuditEventBuilder.client_credited(
            client_id=credited.id,
            name=credited.name,
            completed=credited.completed_appointments,
            created=created,
        ))
        return credited

    def history(self, client_id: UUID) -> list[Appointment]:
        """Completed appointments for a client, newest first."""
        client = self._state.find_client(client_id)
        if client is None:
            return []
        return client_history(self._state.appointments, client)
