"""Wire formatting for decimal amounts and percentages."""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


def fixed_2dp(value: Decimal) -> str:
    """Render with exactly two decimals, e.g. 23.4 -> "23.40", never "-0.00"."""
    rounded = Decimal(value).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = Decimal('0.00')
    return f"{rounded:.2f}"


def iso_or_empty(value: Optional[date]) -> str:
    return value.isoformat() if value else ""
