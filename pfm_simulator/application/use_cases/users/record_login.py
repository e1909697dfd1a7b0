"""Use case for registering the last login of a user."""

from sqlalchemy.orm import Session

from pfm_simulator.infrastructure.repositories import UserRepository
from pfm_simulator.utils import now_in_app_timezone


def record_login(session: Session, user_id: int) -> None:
    """Persist the last login timestamp and bump the login counter."""

    repository = UserRepository(session)
    if repository.get(user_id) is None:
        return
    repository.record_login(user_id, logged_in_at=now_in_app_timezone())
