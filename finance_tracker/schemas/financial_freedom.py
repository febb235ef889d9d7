"""
Pydantic schemas for financial freedom calculator entries.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class FinancialFreedomInput(BaseModel):
    initial_savings: Decimal = Field(default=Decimal("0"), ge=0)
    monthly_savings: Decimal = Field(ge=0)
    return_rate: Decimal = Field(ge=0, le=100)
    monthly_expenses: Decimal = Field(gt=0)
    monthly_income: Decimal = Field(default=Decimal("0"), ge=0)
    dependents: int = Field(default=0, ge=0)


class FinancialFreedomResponse(BaseModel):
    id: int
    initial_savings: Decimal
    monthly_savings: Decimal
    annual_savings: Decimal
    return_rate: Decimal
    monthly_expenses: Decimal
    annual_expenses: Decimal
    monthly_income: Decimal
    dependents: int
    target_amount: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}
