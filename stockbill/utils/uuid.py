"""Identifier and clock helpers."""

import uuid
from datetime import datetime, timezone

def generate_uuid() -> str:
    """Generate an opaque record id.

    Returns:
        String representation of UUID4
    """
    return str(uuid.uuid4())

def utcnow() -> datetime:
    """Timezone-aware current time used for record timestamps."""
    return datetime.now(timezone.utc)
