"""
Pydantic schemas for category operations.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from finance_tracker.models.enums import TransactionType


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    type: TransactionType


class CategoryResponse(BaseModel):
    id: int
    name: str
    type: TransactionType
    created_at: datetime

    model_config = {"from_attributes": True}


class CategoryBrief(BaseModel):
    """Category display fields joined into transaction responses."""
    name: str
    type: TransactionType

    model_config = {"from_attributes": True}
