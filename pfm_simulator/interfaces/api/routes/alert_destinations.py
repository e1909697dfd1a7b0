"""Endpoints for where alert notifications are delivered."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.users import (
    get_alert_destinations,
    update_alert_destinations,
)
from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.database import get_db
from pfm_simulator.interfaces.api.dependencies import get_current_user
from pfm_simulator.interfaces.api.schemas import AlertDestinationsUpdate

router = APIRouter(
    prefix="/api/v2/users/{user_id}/alert_destinations", tags=["alerts"]
)


@router.get("")
def read_destinations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"destinations": get_alert_destinations(db, current_user.id)}


@router.put("")
def update_destinations(
    payload: AlertDestinationsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Changing a destination resets its verified flag."""

    try:
        destinations = update_alert_destinations(
            db, current_user.id, email=payload.email, sms=payload.sms
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return {"destinations": destinations}
