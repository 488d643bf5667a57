"""Row ids and timestamps for inventory records."""

import uuid
from datetime import datetime, timezone


def generate_row_id() -> str:
    """UUID4 primary key for snapshot, node, connection and sync run rows."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
