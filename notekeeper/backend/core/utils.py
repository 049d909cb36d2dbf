"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import math
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def total_pages(total_items: int, per_page: int) -> int:
    """Number of pages needed to show ``total_items`` at ``per_page`` each."""
    return math.ceil(total_items / per_page)
