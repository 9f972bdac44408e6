"""
Transaction Ledger

Append/delete-only collection of income and expense entries.
Totals are folded over the current list on every read.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from studio.audit import AuditLogger
from studio.models.audit import AuditEventBuilder
from studio.models.records import Transaction, TransactionType
from studio.models.state import StudioState
from studio.services.storage import StateStore


class LedgerSummary(BaseModel):
    """Income, expense and balance over the whole ledger."""

    income: float = 0.0
    expense: float = 0.0

    @property
    def balance(self) -> float:
        return self.income - self.expense


class TransactionLedger:
    """Adds and deletes transactions, keeping the list newest first."""

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
    def transactions(self) -> list[Transaction]:
        return self._state.transactions

    def add(
        self,
        description: str,
        amount: float,
        type: TransactionType,
        date: date,
    ) -> Transaction:
        """Record a new transaction and persist the ledger."""
        transaction = self.post(Transaction(
            description=description,
            amount=amount,
            type=type,
            date=date,
        ))
        self._store.save_transactions(self._state)
        return transaction

    def post(self, transaction: Transaction) -> Transaction:
        """Insert and re-sort without persisting; callers save."""
        self._state.transactions.append(transaction)
        self._state.sort_transactions()
        self._audit_logger.log_transaction_added(transaction)
        return transaction

    def delete(self, transaction_id: UUID) -> bool:
        """Remove a transaction. Unknown ids are ignored."""
        transaction = self._state.find_transaction(transaction_id)
        if transaction is None:
            self._audit_logger.log_not_found("transaction", transaction_id, "delete")
            return False

        self._state.transactions.remove(transaction)
        self._store.save_transactions(self._state)
        self._audit_logger.log(AuditEventBuilder.transaction_deleted(transaction_id))
        return True

    def summary(self) -> LedgerSummary:
        return summarize(self._state.transactions)

    def income_total(self) -> float:
        return self.summary().income

    def expense_total(self) -> float:
        return self.summary().expense

    def balance(self) -> float:
        return self.summary().balance


def summarize(transactions: list[Transaction]) -> LedgerSummary:
    """Fold a list of transactions into income/expense totals."""
    income = sum(t.amount for t in transactions if t.type == TransactionType.INCOME)
    expense = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
    return LedgerSummary(income=income, expense=expense)
