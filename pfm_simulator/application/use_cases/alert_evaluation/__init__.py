"""Alert evaluation use cases."""

from .conditions import (
    AlertCondition,
    BalanceThreshold,
    ConditionEvaluationError,
    GoalMilestone,
    MerchantName,
    SpendingTarget,
    TransactionLimit,
    UpcomingBill,
    decode_conditions,
)
from .evaluator import (
    AlertEvaluationFailure,
    AlertEvaluator,
    EvaluationResult,
    evaluate,
    notification_fingerprints,
)
from .fingerprints import FingerprintCache, notification_fingerprint
from .predicates import AlertMatch

__all__ = [
    "AlertCondition",
    "AlertEvaluationFailure",
    "AlertEvaluator",
    "AlertMatch",
    "BalanceThreshold",
    "ConditionEvaluationError",
    "EvaluationResult",
    "FingerprintCache",
    "GoalMilestone",
    "MerchantName",
    "SpendingTarget",
    "TransactionLimit",
    "UpcomingBill",
    "decode_conditions",
    "evaluate",
    "notification_fingerprint",
    "notification_fingerprints",
]
