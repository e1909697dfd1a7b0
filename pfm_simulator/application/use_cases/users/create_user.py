"""Use case for creating users."""

from sqlalchemy.orm import Session

from pfm_simulator.domain.entities import User
from pfm_simulator.infrastructure.repositories import UserRepository
from pfm_simulator.infrastructure.security import get_password_hash
from pfm_simulator.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    partner_id: int,
    first_name: str | None = None,
    last_name: str | None = None,
    user_id: int | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = email.strip().lower()
    if repository.get_by_email(normalized_email):
        raise ValueError("Email is already registered")
    if user_id is not None and repository.get(user_id):
        raise ValueError(f"User {user_id} already exists")

    user = User(
        id=user_id,
        partner_id=partner_id,
        email=normalized_email,
        first_name=first_name,
        last_name=last_name,
        hashed_password=get_password_hash(password),
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)
