"""
Financial freedom calculator entry.

Each save appends a new row; the latest row is what the
calculator loads back. Annual figures and the target amount
are derived at save time.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Integer
from sqlalchemy.orm import Mapped, mapped_column

from finance_tracker.models.base import Base


class FinancialFreedomEntry(Base):
    __tablename__ = "financial_freedom_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True
    )
    initial_savings: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    monthly_savings: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    annual_savings: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    # Expected yearly return, in percent
    return_rate: Mapped[Decimal] = mapped_column(
        Numeric(7, 4), nullable=False
    )
    monthly_expenses: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    annual_expenses: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    monthly_income: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    dependents: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    target_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
