"""
Pydantic schemas for the stock portfolio.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class StockCreate(BaseModel):
    symbol: str = Field(min_length=1, max_length=20)
    lots: int = Field(gt=0)
    buy_price: Decimal = Field(gt=0, decimal_places=4)

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()


class StockResponse(BaseModel):
    id: int
    symbol: str
    lots: int
    buy_price: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}


class HoldingValuation(BaseModel):
    """A holding priced at the latest quote. current_price is None when unquoted."""
    id: int
    symbol: str
    lots: int
    shares: int
    buy_price: Decimal
    cost_basis: Decimal
    current_price: Decimal | None
    market_value: Decimal | None
    gain: Decimal | None


class PortfolioResponse(BaseModel):
    holdings: list[HoldingValuation]
    total_cost: Decimal
    total_value: Decimal
    total_gain: Decimal
