"""Pydantic models describing notification and destination payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class AlertDestinationsUpdate(BaseModel):
    """Where alert notifications should be delivered."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    sms: str | None = Field(
        default=None,
        pattern=r"^\+?[1-9]\d{1,14}$",
        description="Phone number in E.164 format",
    )

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("destinations"), dict):
            return data["destinations"]
        return data


__all__ = ["AlertDestinationsUpdate"]
