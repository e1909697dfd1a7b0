"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1)


class LoginUser(BaseModel):
    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    partner_id: str


class LoginResponse(BaseModel):
    token: str
    user: LoginUser


class LogoutResponse(BaseModel):
    message: str
