"""
Financial freedom entries: saved calculator inputs.

Each save is a new row. The target amount uses the 3% rule:
the nest egg whose 3% yearly withdrawal covers a year of
expenses.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from finance_tracker.errors import NotFound
from finance_tracker.models.financial_freedom import FinancialFreedomEntry
from finance_tracker.schemas.financial_freedom import FinancialFreedomInput
from finance_tracker.services.api_key_gate import OwnerScope

SAFE_WITHDRAWAL_RATE = Decimal("0.03")
MONTHS_PER_YEAR = 12


def target_amount(monthly_expenses: Decimal) -> Decimal:
    return (monthly_expenses * MONTHS_PER_YEAR) / SAFE_WITHDRAWAL_RATE


class FinancialFreedomService:

    def __init__(self, db: Session):
        self.db = db

    def save(
        self, scope: OwnerScope, request: FinancialFreedomInput
    ) -> FinancialFreedomEntry:
        entry = FinancialFreedomEntry(
            owner_id=scope.owner_id,
            initial_savings=request.initial_savings,
            monthly_savings=request.monthly_savings,
            annual_savings=request.monthly_savings * MONTHS_PER_YEAR,
            return_rate=request.return_rate,
            monthly_expenses=request.monthly_expenses,
            annual_expenses=request.monthly_expenses * MONTHS_PER_YEAR,
            monthly_income=request.monthly_income,
            dependents=request.dependents,
            target_amount=target_amount(request.monthly_expenses),
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def latest(self, scope: OwnerScope) -> FinancialFreedomEntry:
        entry = self.db.execute(
            select(FinancialFreedomEntry)
            .where(FinancialFreedomEntry.owner_id == scope.owner_id)
            .order_by(
                FinancialFreedomEntry.created_at.desc(),
                FinancialFreedomEntry.id.desc(),
            )
            .limit(1)
        ).scalar_one_or_none()
        if not entry:
            raise NotFound("No financial freedom entry saved yet")
        return entry
