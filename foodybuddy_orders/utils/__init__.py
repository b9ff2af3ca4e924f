"""Utilities package for the FoodyBuddy orders service."""

from .datetime_utils import ensure_utc, utc_now

__all__ = [
    "ensure_utc",
    "utc_now",
]
