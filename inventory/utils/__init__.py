"""Utility functions for the workflow inventory."""

from inventory.utils.identifiers import (
    generate_row_id,
    utc_timestamp,
)
from inventory.utils.text import (
    ELLIPSIS,
    escape_label,
    slugify,
    truncate,
    unique,
)

__all__ = [
    "generate_row_id",
    "utc_timestamp",
    "ELLIPSIS",
    "escape_label",
    "slugify",
    "truncate",
    "unique",
]
