"""Request bodies for alert endpoints.

Clients may send the fields at the top level or nested under ``"alert"``;
both shapes are accepted.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

MONEY_PATTERN = r"^\d+(\.\d{2})?$"


class AlertBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=255)
    email_delivery: bool = True
    sms_delivery: bool = False

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("alert"), dict):
            return data["alert"]
        return data


class AccountThresholdAlertCreate(AlertBase):
    account_id: int
    threshold: str = Field(..., pattern=MONEY_PATTERN, description="Decimal with 2 places")
    direction: Literal["below", "above"]

    @property
    def threshold_amount(self) -> Decimal:
        return Decimal(self.threshold)


class GoalAlertCreate(AlertBase):
    goal_id: int
    milestone_percentage: int = Field(..., ge=0, le=100)


class MerchantNameAlertCreate(AlertBase):
    merchant_pattern: str = Field(..., min_length=1)
    match_type: Literal["exact", "contains"] = "contains"


class SpendingTargetAlertCreate(AlertBase):
    budget_id: int
    threshold_percentage: int = Field(..., ge=0, le=200)


class TransactionLimitAlertCreate(AlertBase):
    amount: str = Field(..., pattern=MONEY_PATTERN, description="Decimal with 2 places")
    account_id: int | None = None

    @property
    def limit_amount(self) -> Decimal:
        return Decimal(self.amount)


class UpcomingBillAlertCreate(AlertBase):
    bill_id: int
    days_before: int = Field(..., ge=1, le=30)


class AlertUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    conditions: dict[str, Any] | None = None
    email_delivery: bool | None = None
    sms_delivery: bool | None = None
    active: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("alert"), dict):
            return data["alert"]
        return data


__all__ = [
    "AccountThresholdAlertCreate",
    "AlertUpdate",
    "GoalAlertCreate",
    "MerchantNameAlertCreate",
    "SpendingTargetAlertCreate",
    "TransactionLimitAlertCreate",
    "UpcomingBillAlertCreate",
]
