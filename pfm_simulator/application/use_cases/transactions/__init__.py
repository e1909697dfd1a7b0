"""Use cases for transactions."""

from .create_transaction import TransactionCreationResult, create_transaction

__all__ = ["TransactionCreationResult", "create_transaction"]
