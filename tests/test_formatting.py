"""Tests for pt-BR display helpers."""

from datetime import date

import pytest

from studio.formatting import (
    completed_services_label,
    format_brl,
    format_day_heading,
    format_month_title,
    format_short_date,
    format_signed_amount,
    format_weekday_date,
    status_label,
)
from studio.models.records import Transaction


@pytest.mark.parametrize("value,expected", [
    (0, "R$ 0,00"),
    (50, "R$ 50,00"),
    (1234.5, "R$ 1.234,50"),
    (1234567.891, "R$ 1.234.567,89"),
    (-20, "-R$ 20,00"),
])
def test_format_brl(value, expected):
    assert format_brl(value) == expected


def test_signed_amount():
    income = Transaction(description="a", amount=50, type="income", date=date(2024, 6, 1))
    expense = Transaction(description="b", amount=20, type="expense", date=date(2024, 6, 1))
    assert format_signed_amount(income) == "+ R$ 50,00"
    assert format_signed_amount(expense) == "- R$ 20,00"


def test_status_label():
    assert status_label("scheduled") == "Agendado"
    assert status_label("completed") == "Concluído"
    assert status_label("canceled") == "Cancelado"


def test_completed_services_label():
    assert completed_services_label(0) == "0 serviços concluídos"
    assert completed_services_label(1) == "1 serviço concluído"
    assert completed_services_label(3) == "3 serviços concluídos"


def test_dates():
    day = date(2024, 6, 1)
    assert format_short_date(day) == "01/06/2024"
    assert format_weekday_date(day) == "sábado, 01/06"
    assert format_day_heading(day) == "sábado, 01 de junho"
    assert format_month_title(2024, 3) == "MARÇO DE 2024"
