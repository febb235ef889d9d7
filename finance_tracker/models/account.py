"""
Account model.

A place money lives (bank account, e-wallet, cash). The
balance is maintained eagerly by the ledger service: every
transaction create/delete shifts it by the transaction's
delta in the same database transaction.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from finance_tracker.models.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # Only ever changed through a single UPDATE ... SET balance = balance + :delta
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    # Starting balance typed in when the account was created
    opening_balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    color: Mapped[str] = mapped_column(
        String(20), nullable=False, default="#3b82f6"
    )
    icon: Mapped[str] = mapped_column(
        String(50), nullable=False, default="wallet"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Account {self.name} balance={self.balance}>"
