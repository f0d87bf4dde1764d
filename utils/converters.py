"""
utils/converters.py
-------------------
Helpers for mapping database values onto domain models.
"""

from decimal import Decimal
from typing import Optional


def to_float(value: Decimal | float | int | None) -> Optional[float]:
    """Convert a NUMERIC column value to float, keeping NULL as None."""
    if value is None:
        return None
    return float(value)
