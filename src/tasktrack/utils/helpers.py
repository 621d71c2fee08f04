"""Small shared helpers for ids and timestamps."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime


def generate_id() -> str:
    """Generate a new record id.

    Returns:
        UUID4 string (e.g., "123e4567-e89b-42d3-a456-426614174000")
    """
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current timestamp in ISO format.

    Returns:
        ISO format datetime string in UTC
    """
    return datetime.now(UTC).isoformat()


def parse_iso(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive values as UTC.

    A datetime is passed through, made UTC-aware when naive.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
