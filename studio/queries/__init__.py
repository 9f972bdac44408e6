"""Read-only views over the studio's state."""

from studio.queries.views import (
    appointment_history,
    appointments_by_date,
    appointments_on,
    client_history,
    upcoming_appointments,
)
from studio.queries.calendar import (
    WEEKDAY_HEADERS,
    CalendarDay,
    CalendarMonth,
    build_month,
    shift_month,
)

__all__ = [
    "WEEKDAY_HEADERS",
    "CalendarDay",
    "CalendarMonth",
    "appointment_history",
    "appointments_by_date",
    "appointments_on",
    "build_month",
    "client_history",
    "shift_month",
    "upcoming_appointments",
]
