"""
Portuguese (pt-BR) display helpers.

The app only ever shows Brazilian Portuguese, so month and weekday
names are fixed tables rather than locale lookups.
"""

from datetime import date

from studio.models.records import AppointmentStatus, Transaction, TransactionType


MONTHS_PT = (
    "", "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

# date.weekday(): Monday is 0
WEEKDAYS_PT = (
    "segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
    "sexta-feira", "sábado", "domingo",
)

STATUS_LABELS = {
    AppointmentStatus.SCHEDULED: "Agendado",
    AppointmentStatus.COMPLETED: "Concluído",
    AppointmentStatus.CANCELED: "Cancelado",
}

TRANSACTION_TYPE_LABELS = {
    TransactionType.INCOME: "Entrada",
    TransactionType.EXPENSE: "Saída",
}


def format_brl(value: float) -> str:
    """Format a value as BRL: R$ 1.234,56 / -R$ 1.234,56"""
    value = value or 0.0
    text = f"{abs(value):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    if value < 0:
        return f"-R$ {text}"
    return f"R$ {text}"


def format_signed_amount(transaction: Transaction) -> str:
    """Ledger line amount: '+ R$ 50,00' for income, '- R$ 20,00' for expense."""
    sign = "+" if transaction.type == TransactionType.INCOME else "-"
    return f"{sign} {format_brl(transaction.amount)}"


def status_label(status: AppointmentStatus) -> str:
    return STATUS_LABELS[AppointmentStatus(status)]


def completed_services_label(count: int) -> str:
    if count == 1:
        return "1 serviço concluído"
    return f"{count} serviços concluídos"


def format_short_date(day: date) -> str:
    """'01/06/2024'"""
    return day.strftime("%d/%m/%Y")


def format_weekday_date(day: date) -> str:
    """'sábado, 01/06'"""
    return f"{WEEKDAYS_PT[day.weekday()]}, {day.day:02d}/{day.month:02d}"


def format_day_heading(day: date) -> str:
    """'sábado, 01 de junho'"""
    return f"{WEEKDAYS_PT[day.weekday()]}, {day.day:02d} de {MONTHS_PT[day.month]}"


def format_month_title(year: int, month: int) -> str:
    """'JUNHO DE 2024'"""
    return f"{MONTHS_PT[month]} de {year}".upper()
