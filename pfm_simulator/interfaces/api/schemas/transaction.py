"""Schemas for manually recorded transactions."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, model_validator


class TransactionCreate(BaseModel):
    account_id: int
    amount: Decimal = Field(..., description="Negative amounts are debits")
    merchant_name: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=255)
    nickname: str | None = Field(default=None, max_length=255)
    original_description: str | None = Field(default=None, max_length=255)
    posted_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("transaction"), dict):
            return data["transaction"]
        return data
