"""Utility helpers for reusable functionality."""

from .datetime import (
    Clock,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    parse_vendor_datetime,
)

__all__ = [
    "Clock",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_vendor_datetime",
]
