"""Alert management endpoints scoped to the authenticated user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from pfm_simulator.application.use_cases.alert_evaluation import evaluate
from pfm_simulator.application.use_cases.alerts import (
    create_account_threshold_alert,
    create_goal_alert,
    create_merchant_name_alert,
    create_spending_target_alert,
    create_transaction_limit_alert,
    create_upcoming_bill_alert,
    delete_alert as delete_alert_uc,
    get_alert as get_alert_uc,
    list_alerts as list_alerts_uc,
    set_alert_active,
    update_alert as update_alert_uc,
)
from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.database import get_db
from pfm_simulator.interfaces.api.dependencies import get_current_user
from pfm_simulator.interfaces.api.routes_helpers import (
    serialize_alert,
    serialize_evaluation,
)
from pfm_simulator.interfaces.api.schemas import (
    AccountThresholdAlertCreate,
    AlertUpdate,
    GoalAlertCreate,
    MerchantNameAlertCreate,
    SpendingTargetAlertCreate,
    TransactionLimitAlertCreate,
    UpcomingBillAlertCreate,
)

router = APIRouter(prefix="/api/v2/users/{user_id}/alerts", tags=["alerts"])


def _bad_request(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _not_found(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("")
def list_alerts(
    include_inactive: bool = Query(True),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List alerts, active ones first and newest first."""

    alerts = list_alerts_uc(db, current_user.id, include_inactive=include_inactive)
    return {"alerts": [serialize_alert(alert) for alert in alerts]}


@router.post("/evaluate")
def evaluate_alerts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Run the evaluator for the current user and return the summary."""

    result = evaluate(db, current_user.id)
    return serialize_evaluation(result)


@router.post("/account_thresholds", status_code=status.HTTP_201_CREATED)
def create_account_threshold(
    payload: AccountThresholdAlertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = create_account_threshold_alert(
            db,
            current_user.id,
            name=payload.name,
            account_id=payload.account_id,
            threshold=payload.threshold_amount,
            direction=payload.direction,
            email_delivery=payload.email_delivery,
            sms_delivery=payload.sms_delivery,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.post("/goals", status_code=status.HTTP_201_CREATED)
def create_goal(
    payload: GoalAlertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = create_goal_alert(
            db,
            current_user.id,
            name=payload.name,
            goal_id=payload.goal_id,
            milestone_percentage=payload.milestone_percentage,
            email_delivery=payload.email_delivery,
            sms_delivery=payload.sms_delivery,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.post("/merchant_names", status_code=status.HTTP_201_CREATED)
def create_merchant_name(
    payload: MerchantNameAlertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = create_merchant_name_alert(
            db,
            current_user.id,
            name=payload.name,
            merchant_pattern=payload.merchant_pattern,
            match_type=payload.match_type,
            email_delivery=payload.email_delivery,
            sms_delivery=payload.sms_delivery,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.post("/spending_targets", status_code=status.HTTP_201_CREATED)
def create_spending_target(
    payload: SpendingTargetAlertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = create_spending_target_alert(
            db,
            current_user.id,
            name=payload.name,
            budget_id=payload.budget_id,
            threshold_percentage=payload.threshold_percentage,
            email_delivery=payload.email_delivery,
            sms_delivery=payload.sms_delivery,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.post("/transaction_limits", status_code=status.HTTP_201_CREATED)
def create_transaction_limit(
    payload: TransactionLimitAlertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = create_transaction_limit_alert(
            db,
            current_user.id,
            name=payload.name,
            amount=payload.limit_amount,
            account_id=payload.account_id,
            email_delivery=payload.email_delivery,
            sms_delivery=payload.sms_delivery,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.post("/upcoming_bills", status_code=status.HTTP_201_CREATED)
def create_upcoming_bill(
    payload: UpcomingBillAlertCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = create_upcoming_bill_alert(
            db,
            current_user.id,
            name=payload.name,
            bill_id=payload.bill_id,
            days_before=payload.days_before,
            email_delivery=payload.email_delivery,
            sms_delivery=payload.sms_delivery,
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.get("/{alert_id}")
def read_alert(
    alert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = get_alert_uc(db, current_user.id, alert_id)
    except ValueError as exc:
        raise _not_found(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.put("/{alert_id}")
def update_alert(
    alert_id: int,
    payload: AlertUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Apply a partial update; new conditions must fit the alert's type."""

    try:
        get_alert_uc(db, current_user.id, alert_id)
    except ValueError as exc:
        raise _not_found(exc) from exc

    try:
        alert = update_alert_uc(
            db,
            current_user.id,
            alert_id,
            **payload.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.delete("/{alert_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_alert(
    alert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_alert_uc(db, current_user.id, alert_id)
    except ValueError as exc:
        raise _not_found(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{alert_id}/enable")
def enable_alert(
    alert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = set_alert_active(db, current_user.id, alert_id, True)
    except ValueError as exc:
        raise _not_found(exc) from exc
    return {"alert": serialize_alert(alert)}


@router.put("/{alert_id}/disable")
def disable_alert(
    alert_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        alert = set_alert_active(db, current_user.id, alert_id, False)
    except ValueError as exc:
        raise _not_found(exc) from exc
    return {"alert": serialize_alert(alert)}
