"""
Monthly Calendar Grid

Builds the month view used by the scheduler's calendar tab: weeks start
on Sunday, the first week is padded with blanks before day 1, and each
day knows whether it has appointments, is today, or is selected.
"""

import calendar
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from studio.models.records import Appointment
from studio.queries.views import appointments_by_date


WEEKDAY_HEADERS = ("Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb")


class CalendarDay(BaseModel):
    """One cell of the month grid."""

    day: date
    appointment_count: int = 0
    is_today: bool = False
    is_selected: bool = False

    @property
    def has_appointments(self) -> bool:
        return self.appointment_count > 0


class CalendarMonth(BaseModel):
    """A month laid out as weeks of seven cells; None marks a blank cell."""

    year: int
    month: int = Field(ge=1, le=12)
    weeks: list[list[Optional[CalendarDay]]]

    @property
    def days(self) -> list[CalendarDay]:
        return [cell for week in self.weeks for cell in week if cell is not None]

    def previous(self) -> tuple[int, int]:
        return shift_month(self.year, self.month, -1)

    def next(self) -> tuple[int, int]:
        return shift_month(self.year, self.month, 1)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month(
    year: int,
    month: int,
    appointments: list[Appointment],
    today: Optional[date] = None,
    selected: Optional[date] = None,
) -> CalendarMonth:
    """Lay out a month, marking days that have appointments."""
    today = today or date.today()
    counts = {day: len(items) for day, items in appointments_by_date(appointments).items()}

    # SUNDAY first, matching the Dom..Sáb header
    grid = calendar.Calendar(firstweekday=calendar.SUNDAY)
    weeks: list[list[Optional[CalendarDay]]] = []
    for week in grid.monthdatescalendar(year, month):
        row: list[Optional[CalendarDay]] = []
        for day in week:
            if day.month != month:
                row.append(None)
                continue
            row.append(CalendarDay(
                day=day,
                appointment_count=counts.get(day, 0),
                is_today=day == today,
                is_selected=day == selected,
            ))
        weeks.append(row)

    return CalendarMonth(year=year, month=month, weeks=weeks)
