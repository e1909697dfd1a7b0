"""Endpoint for recording a manual transaction."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.transactions import create_transaction
from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.database import get_db
from pfm_simulator.interfaces.api.dependencies import get_current_user
from pfm_simulator.interfaces.api.routes_helpers import (
    serialize_evaluation,
    serialize_transaction,
)
from pfm_simulator.interfaces.api.schemas import TransactionCreate
from pfm_simulator.utils.serializers import wrap_in_array

router = APIRouter(prefix="/api/v2/users/{user_id}/transactions", tags=["transactions"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Persist the transaction, then run merchant and limit alerts for the user."""

    try:
        result = create_transaction(
            db,
            current_user.id,
            **payload.model_dump(),
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    body = wrap_in_array(serialize_transaction(result.transaction), "transactions")
    body["alert_evaluation"] = serialize_evaluation(result.evaluation)
    return body
