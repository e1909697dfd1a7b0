"""Endpoints for logging in to the simulator."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
)
from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.database import get_db
from pfm_simulator.infrastructure.security import create_access_token
from pfm_simulator.interfaces.api.dependencies import get_current_user
from pfm_simulator.interfaces.api.routes_helpers import serialize_login_user
from pfm_simulator.interfaces.api.schemas import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
)

router = APIRouter(prefix="/api/v2/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate by email and password and return a session token."""

    user, auth_status = authenticate_user(db, payload.email, payload.password)
    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(
        user_id=user.id,
        partner_id=user.partner_id,
        email=user.email,
    )
    record_login(db, user.id)
    logger.info("User %s logged in", user.id)
    return {"token": token, "user": serialize_login_user(user)}


@router.post("/logout", response_model=LogoutResponse)
def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; logging out only needs the client to drop it."""

    logger.info("User %s logged out", current_user.id)
    return {"message": "Logged out successfully"}
