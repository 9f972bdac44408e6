"""
Read-only Views

Derived lists over the appointment collection. Nothing here mutates
state or caches results; every view is recomputed from the current list.
"""

from collections import defaultdict
from datetime import date

from studio.models.records import Appointment, AppointmentStatus, Client


def upcoming_appointments(appointments: list[Appointment]) -> list[Appointment]:
    """Scheduled appointments, earliest first."""
    return sorted(
        (a for a in appointments if a.status == AppointmentStatus.SCHEDULED),
        key=lambda a: a.starts_at,
    )


def appointment_history(appointments: list[Appointment]) -> list[Appointment]:
    """Completed and canceled appointments, latest first."""
    return sorted(
        (a for a in appointments if a.status != AppointmentStatus.SCHEDULED),
        key=lambda a: a.starts_at,
        reverse=True,
    )


def appointments_by_date(appointments: list[Appointment]) -> dict[date, list[Appointment]]:
    """Group appointments by their exact date, keeping list order within a day."""
    grouped: dict[date, list[Appointment]] = defaultdict(list)
    for appointment in appointments:
        grouped[appointment.date].append(appointment)
    return dict(grouped)


def appointments_on(appointments: list[Appointment], day: date) -> list[Appointment]:
    """Appointments on one day, sorted by time."""
    return sorted(
        appointments_by_date(appointments).get(day, []),
        key=lambda a: a.time,
    )


def client_history(appointments: list[Appointment], client: Client) -> list[Appointment]:
    """
    Completed appointments for a client, newest first.

    An appointment belongs to the client when its name matches
    case-insensitively, or when it was credited to the client's id
    (which keeps it listed after the client is renamed).
    """
    def belongs(appointment: Appointment) -> bool:
        return (
            appointment.client_id == client.id
            or client.matches_name(appointment.client_name)
        )

    return sorted(
        (
            a for a in appointments
            if a.status == AppointmentStatus.COMPLETED and belongs(a)
        ),
        key=lambda a: a.date,
        reverse=True,
    )
