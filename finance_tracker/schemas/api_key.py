"""
Pydantic schemas for API key management.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ApiKeyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class ApiKeyResponse(BaseModel):
    id: int
    name: str
    key_prefix: str
    created_at: datetime
    last_used_at: datetime | None

    model_config = {"from_attributes": True}


class ApiKeyIssued(ApiKeyResponse):
    """Returned once, at creation. raw_key is never shown again."""
    raw_key: str
