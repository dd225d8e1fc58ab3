# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
GitActivity Utilities
"""

import hashlib
from datetime import datetime, timezone
from typing import Optional

from gitactivity.constants import ISO_FORMAT

# sort key for timestamps that fail to parse
EARLIEST_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


def mask_secret(secret: str, length: int = 5) -> str:
    """Return a short SHA-256 hash of a secret for logging."""
    h = hashlib.sha256(str(secret).encode("utf-8")).hexdigest()
    return f"<masked:{h[:length]}>"


def parse_github_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO 8601 timestamp as an aware UTC datetime.

    Accepts the ``Z`` suffix, fractional seconds and explicit offsets; naive
    values are taken as UTC. Returns None for empty or malformed values instead of raising.
    """
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value.rstrip("Z"))
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return None


def format_github_timestamp(dt: datetime) -> str:
    """Format a datetime in the form expected by GitHub's DateTime/GitTimestamp scalars."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(ISO_FORMAT)
