"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional

from fund_board.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


def to_decimal(name: str, value, allow_negative: bool = True) -> Decimal:
    """
    Coerce a numeric input to Decimal, rejecting NaN / Infinity.
    Floats go through str() so 1.1 stays 1.1.
    """
    if isinstance(value, bool):
        raise ValidationError(name, value, "boolean is not a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError(name, value, "not a number")

    if not result.is_finite():
        raise ValidationError(name, value, "must be finite")
    if not allow_negative and result < Decimal('0'):
        raise ValidationError(name, value, "cannot be negative")
    return result


class HistoryPeriod(str, Enum):
    """Look-back window for the history series"""
    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    ALL = "all"

    @property
    def months(self) -> Optional[int]:
        """Calendar months covered, None for the full history"""
        return {
            HistoryPeriod.ONE_MONTH: 1,
            HistoryPeriod.THREE_MONTHS: 3,
            HistoryPeriod.SIX_MONTHS: 6,
            HistoryPeriod.ONE_YEAR: 12,
            HistoryPeriod.ALL: None,
        }[self]

    @classmethod
    def parse(cls, value) -> "HistoryPeriod":
        """Unknown or empty codes fall back to ALL"""
        if isinstance(value, cls):
            return value
        code = (value or "").strip().lower()
        try:
            return cls(code)
        except ValueError:
            if code:
                logger.warning(f"Unknown history period '{value}', using 'all'")
            return cls.ALL


@dataclass(frozen=True)
class FundHolding:
    """A recorded position in one fund - Immutable"""
    fund_code: str
    cost_per_share: Decimal
    shares: Decimal
    fund_name: str = ""

    def __post_init__(self):
        if not self.fund_code:
            raise ValidationError("fund_code", self.fund_code, "cannot be empty")
        object.__setattr__(
            self, "cost_per_share",
            to_decimal("cost_per_share", self.cost_per_share, allow_negative=False)
        )
        object.__setattr__(
            self, "shares",
            to_decimal("shares", self.shares, allow_negative=False)
        )

    @property
    def total_cost(self) -> Decimal:
        """Cost basis of the whole holding"""
        return self.cost_per_share * self.shares


@dataclass(frozen=True)
class NavObservation:
    """One published NAV for a fund on a calendar date - Immutable"""
    fund_code: str
    date: date
    nav: Decimal
    daily_change_pct: Decimal = Decimal('0')

    def __post_init__(self):
        object.__setattr__(self, "nav", to_decimal("nav", self.nav, allow_negative=False))
        object.__setattr__(
            self, "daily_change_pct",
            to_decimal("daily_change_pct", self.daily_change_pct)
        )


@dataclass(frozen=True)
class SeriesPoint:
    """
    Combined portfolio value on one date.

    `nav` is whichever fund's NAV was folded in last for the date;
    it is for display only and is not a portfolio-level NAV.
    """
    date: date
    total_value: Decimal
    total_cost: Decimal
    profit: Decimal
    nav: Decimal


@dataclass(frozen=True)
class HistoryStats:
    """Summary statistics over a history series"""
    max_drawdown_pct: Decimal = Decimal('0.00')
    max_drawdown_start: Optional[date] = None
    max_drawdown_end: Optional[date] = None
    period_return_pct: Decimal = Decimal('0.00')
    point_count: int = 0


@dataclass(frozen=True)
class HistoryResult:
    """Aggregated series plus its statistics"""
    series: List[SeriesPoint] = field(default_factory=list)
    stats: HistoryStats = field(default_factory=HistoryStats)
