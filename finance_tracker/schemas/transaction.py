"""
Pydantic schemas for transaction operations.

TransactionBody is the loose shape accepted over HTTP (every
field optional, title or description). The route turns it into
a TransactionCreate once the required fields are present.
The body keeps amount as sent; the route runs it through
validate_amount so a non-numeric value is an InvalidAmount (400)
like a zero or negative one.
"""

import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from finance_tracker.models.enums import TransactionType
from finance_tracker.schemas.account import AccountBrief
from finance_tracker.schemas.category import CategoryBrief


class TransactionCreate(BaseModel):
    account_id: int | None = None
    category_id: int
    type: TransactionType
    amount: Decimal
    title: str = Field(min_length=1, max_length=255)
    date: datetime.date | None = None


class TransactionBody(BaseModel):
    # Raw JSON value, checked by validate_amount
    amount: Any = None
    type: TransactionType | None = None
    category_id: int | None = None
    account_id: int | None = None
    title: str | None = None
    description: str | None = None
    date: datetime.date | None = None

    def missing_fields(self) -> list[str]:
        missing = [
            name for name in ("amount", "type", "category_id", "account_id")
            if getattr(self, name) is None
        ]
        if not (self.title or self.description):
            missing.append("title/description")
        return missing

    def to_create(self, amount: Decimal) -> TransactionCreate:
        return TransactionCreate(
            account_id=self.account_id,
            category_id=self.category_id,
            type=self.type,
            amount=amount,
            title=self.title or self.description,
            date=self.date,
        )


class TransactionResponse(BaseModel):
    id: int
    account_id: int | None
    category_id: int
    type: TransactionType
    amount: Decimal
    title: str
    date: datetime.date
    created_at: datetime.datetime
    account: AccountBrief | None = None
    category: CategoryBrief | None = None

    model_config = {"from_attributes": True}


class TransactionSummary(BaseModel):
    """Totals over a date-filtered set of transactions."""
    total_income: Decimal
    total_expense: Decimal
    net_change: Decimal
    transaction_count: int


class TransactionPage(BaseModel):
    transactions: list[TransactionResponse]
    summary: TransactionSummary
