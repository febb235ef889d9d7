"""
Report service: read-only views over the ledger.

Transaction listing with date filters and totals, and the
dashboard summary. Nothing here writes.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import select, func, case
from sqlalchemy.orm import Session, selectinload

from finance_tracker.models.account import Account
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.transaction import TransactionSummary
from finance_tracker.services.api_key_gate import OwnerScope

RECENT_TRANSACTIONS = 5


class ReportService:

    def __init__(self, db: Session):
        self.db = db

    def _filtered(
        self,
        scope: OwnerScope,
        date_from: date | None,
        date_to: date | None,
    ):
        conditions = [Transaction.owner_id == scope.owner_id]
        if date_from is not None:
            conditions.append(Transaction.date >= date_from)
        if date_to is not None:
            conditions.append(Transaction.date <= date_to)
        return conditions

    def list_transactions(
        self,
        scope: OwnerScope,
        limit: int = 20,
        offset: int = 0,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Transaction]:
        """
        Owner's transactions, newest date first.

        Account and category rows are loaded alongside for the
        display fields.
        """
        transactions = self.db.execute(
            select(Transaction)
            .where(*self._filtered(scope, date_from, date_to))
            .options(
                selectinload(Transaction.account),
                selectinload(Transaction.category),
            )
            .order_by(Transaction.date.desc(), Transaction.id.desc())
            .limit(limit)
            .offset(offset)
        ).scalars().all()
        return list(transactions)

    def summarize(
        self,
        scope: OwnerScope,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> TransactionSummary:
        """Totals over every transaction in the date range, not one page."""
        income = func.coalesce(func.sum(case(
            (Transaction.type == TransactionType.INCOME, Transaction.amount),
            else_=0,
        )), 0)
        expense = func.coalesce(func.sum(case(
            (Transaction.type == TransactionType.EXPENSE, Transaction.amount),
            else_=0,
        )), 0)

        row = self.db.execute(
            select(income, expense, func.count(Transaction.id))
            .where(*self._filtered(scope, date_from, date_to))
        ).one()

        total_income = Decimal(str(row[0]))
        total_expense = Decimal(str(row[1]))
        return TransactionSummary(
            total_income=total_income,
            total_expense=total_expense,
            net_change=total_income - total_expense,
            transaction_count=row[2],
        )

    def dashboard(self, scope: OwnerScope) -> dict:
        """Total balance across accounts and the latest transactions."""
        balances = self.db.execute(
            select(Account.balance).where(Account.owner_id == scope.owner_id)
        ).scalars().all()

        return {
            "total_balance": sum(
                (Decimal(str(b)) for b in balances), Decimal("0")
            ),
            "account_count": len(balances),
            "recent_transactions": self.list_transactions(
                scope, limit=RECENT_TRANSACTIONS
            ),
        }
