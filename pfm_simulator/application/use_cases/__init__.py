"""Aggregate application use cases."""

from .alert_evaluation import evaluate
from .migration import MigrationImporter
from .users import authenticate_user, create_user, record_login

__all__ = [
    "MigrationImporter",
    "authenticate_user",
    "create_user",
    "evaluate",
    "record_login",
]
