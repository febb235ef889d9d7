"""
Pydantic schemas for account operations.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Request to create an account. balance is the opening balance."""
    name: str = Field(min_length=1, max_length=100)
    balance: Decimal = Field(default=Decimal("0"), decimal_places=4)
    color: str = Field(default="#3b82f6", max_length=20)
    icon: str = Field(default="wallet", max_length=50)


class AccountResponse(BaseModel):
    id: int
    name: str
    balance: Decimal
    opening_balance: Decimal
    color: str
    icon: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AccountBrief(BaseModel):
    """Account display fields joined into transaction responses."""
    name: str
    color: str

    model_config = {"from_attributes": True}


class BalanceCheckResponse(BaseModel):
    """Stored balance compared with the balance rebuilt from transactions."""
    account_id: int
    stored_balance: Decimal
    expected_balance: Decimal
    consistent: bool
