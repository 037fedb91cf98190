"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_naive_datetime,
    format_date,
    format_timestamp,
    get_app_timezone,
    hours_between,
    now_in_app_naive_datetime,
    now_in_app_timezone,
)

__all__ = [
    "ensure_app_naive_datetime",
    "format_date",
    "format_timestamp",
    "get_app_timezone",
    "hours_between",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
]
