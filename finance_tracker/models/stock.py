"""
Stock holding model.

Independent of the ledger. Only the position is stored; the
current price comes from the quote webhook at read time.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, Integer
from sqlalchemy.orm import Mapped, mapped_column

from finance_tracker.models.base import Base

# Exchange lot size: one lot is 100 shares
SHARES_PER_LOT = 100


class StockHolding(Base):
    __tablename__ = "stocks"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True
    )
    symbol: Mapped[str] = mapped_column(String(20), nullable=False)
    lots: Mapped[int] = mapped_column(Integer, nullable=False)
    buy_price: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    @property
    def shares(self) -> int:
        return self.lots * SHARES_PER_LOT

    @property
    def cost_basis(self) -> Decimal:
        return self.buy_price * self.shares

    def __repr__(self) -> str:
        return f"<StockHolding {self.symbol} {self.lots} lots>"
