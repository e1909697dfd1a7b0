"""Evaluate alerts once, for cron or manual runs.

Example crontab entry (every 5 minutes)::

    */5 * * * * cd /srv/pfm-simulator && python -m scripts.evaluate_alerts
"""

from __future__ import annotations

import argparse
import json
import logging

from pfm_simulator.application.use_cases.alert_evaluation import evaluate
from pfm_simulator.config import get_settings
from pfm_simulator.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate active alerts.")
    parser.add_argument(
        "--user-id",
        type=int,
        default=None,
        help="Only evaluate this user's alerts. Defaults to every user with active alerts.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=get_settings().log_level.upper())

    initialize_database()

    session = SessionLocal()
    try:
        result = evaluate(session, args.user_id)
    finally:
        session.close()

    print(
        json.dumps(
            {
                "evaluated_count": result.evaluated_count,
                "fired_count": result.fired_count,
                "suppressed_count": result.suppressed_count,
                "errors": [
                    {"alert_id": failure.alert_id, "message": failure.message}
                    for failure in result.errors
                ],
            },
            indent=2,
        )
    )
    return 1 if result.errors else 0


if __name__ == "__main__":
    raise SystemExit(main())
