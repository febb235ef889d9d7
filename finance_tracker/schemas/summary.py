"""
Pydantic schema for the dashboard summary.
"""

from decimal import Decimal

from pydantic import BaseModel

from finance_tracker.schemas.transaction import TransactionResponse


class SummaryResponse(BaseModel):
    total_balance: Decimal
    account_count: int
    recent_transactions: list[TransactionResponse]
