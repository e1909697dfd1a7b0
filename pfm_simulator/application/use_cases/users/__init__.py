"""Use cases for managing users."""

from .alert_destinations import get_alert_destinations, update_alert_destinations
from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user
from .record_login import record_login

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "get_alert_destinations",
    "record_login",
    "update_alert_destinations",
]
