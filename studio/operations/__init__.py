"""State-changing operations on the studio's collections."""

from studio.operations.ledger import LedgerSummary, TransactionLedger, summarize
from studio.operations.roster import ClientRoster
from studio.operations.scheduler import AppointmentScheduler, income_description

__all__ = [
    "AppointmentScheduler",
    "ClientRoster",
    "LedgerSummary",
    "TransactionLedger",
    "income_description",
    "summarize",
]
