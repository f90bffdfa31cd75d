"""
PORTFOLIO HISTORY ENGINE
Merge per-fund NAV series into one portfolio value series

RESPONSIBILITIES:
- Resolve the look-back window for a period code
- Fold every fund's NAV rows into per-date value / cost totals
- Max drawdown (with its peak and trough dates) and period return

RULES:
❌ No database access
❌ No quote fetching
✅ Pure calculation
✅ Deterministic output
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from fund_board.domain.models import (
    FundHolding,
    HistoryPeriod,
    HistoryResult,
    HistoryStats,
    NavObservation,
    SeriesPoint,
)
from fund_board.utils.time import subtract_months, today_market

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


def quantize_2dp(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def period_start_date(period, today: Optional[date] = None) -> Optional[date]:
    """
    First date (inclusive) covered by a period, None when uncapped.

    Months are subtracted on the calendar with month-end clamping,
    e.g. 1m back from 2024-03-31 starts on 2024-02-29.
    """
    months = HistoryPeriod.parse(period).months
    if months is None:
        return None
    return subtract_months(today or today_market(), months)


class _DateBucket:
    """Running totals for one date while folding"""

    __slots__ = ("total_value", "total_cost", "nav")

    def __init__(self):
        self.total_value = Decimal('0')
        self.total_cost = Decimal('0')
        self.nav = Decimal('0')


class PortfolioHistoryEngine:
    """
    Portfolio History Engine
    Builds the combined value series behind the history chart
    """

    def build(
        self,
        funds: Sequence[FundHolding],
        observations_by_fund: Mapping[str, Iterable[NavObservation]],
        period=HistoryPeriod.ALL,
        today: Optional[date] = None,
    ) -> HistoryResult:
        """
        Build the history series and its statistics

        Args:
            funds: Holdings to include (input order decides the per-date nav)
            observations_by_fund: Full NAV history keyed by fund code
            period: Period code or HistoryPeriod; unknown codes mean ALL
            today: Reference date for the window (defaults to market today)

        Returns:
            HistoryResult with the ascending series and its stats
        """
        start_date = period_start_date(period, today)
        series = self._merge_series(funds, observations_by_fund, start_date)

        max_drawdown, drawdown_start, drawdown_end = self._calculate_max_drawdown(series)
        stats = HistoryStats(
            max_drawdown_pct=max_drawdown,
            max_drawdown_start=drawdown_start,
            max_drawdown_end=drawdown_end,
            period_return_pct=self._calculate_period_return(series),
            point_count=len(series),
        )

        logger.debug(
            f"History built: {len(funds)} funds, {stats.point_count} points, "
            f"start={start_date}, max_drawdown={stats.max_drawdown_pct}"
        )
        return HistoryResult(series=series, stats=stats)

    @staticmethod
    def _merge_series(
        funds: Sequence[FundHolding],
        observations_by_fund: Mapping[str, Iterable[NavObservation]],
        start_date: Optional[date],
    ) -> List[SeriesPoint]:
        """
        Fold NAV rows into one point per date, ascending by date.

        Each fund adds nav*shares and cost*shares to the dates it has a
        row for; the last folded row sets the point's nav.
        """
        buckets: Dict[str, _DateBucket] = {}

        for fund in funds:
            fund_cost = fund.total_cost
            for observation in observations_by_fund.get(fund.fund_code, ()):
                if start_date is not None and observation.date < start_date:
                    continue

                key = observation.date.isoformat()
                bucket = buckets.get(key)
                if bucket is None:
                    bucket = buckets[key] = _DateBucket()

                bucket.total_value += observation.nav * fund.shares
                bucket.total_cost += fund_cost
                bucket.nav = observation.nav

        points = [
            SeriesPoint(
                date=date.fromisoformat(key),
                total_value=quantize_2dp(bucket.total_value),
                total_cost=quantize_2dp(bucket.total_cost),
                profit=quantize_2dp(bucket.total_value - bucket.total_cost),
                nav=bucket.nav,
            )
            for key, bucket in buckets.items()
        ]
        points.sort(key=lambda p: p.date)
        return points

    @staticmethod
    def _calculate_max_drawdown(
        series: Sequence[SeriesPoint],
    ) -> Tuple[Decimal, Optional[date], Optional[date]]:
        """
        Largest peak-to-trough decline in percent

        Formula: ((peak - value) / peak) * 100

        Only a strictly larger decline replaces the current worst,
        so on ties the earliest window is kept.
        """
        if len(series) < 2:
            return Decimal('0.00'), None, None

        max_drawdown = Decimal('0')
        drawdown_start: Optional[date] = None
        drawdown_end: Optional[date] = None

        peak = series[0].total_value
        peak_date = series[0].date

        for point in series[1:]:
            value = point.total_value
            if value > peak:
                peak = value
                peak_date = point.date
                continue

            if peak <= Decimal('0'):
                continue

            drawdown = ((peak - value) / peak) * HUNDRED
            if drawdown > max_drawdown:
                max_drawdown = drawdown
                drawdown_start = peak_date
                drawdown_end = point.date

        return quantize_2dp(max_drawdown), drawdown_start, drawdown_end

    @staticmethod
    def _calculate_period_return(series: Sequence[SeriesPoint]) -> Decimal:
        """
        Change from the first to the last point in percent

        Formula: ((last - first) / first) * 100
        A zero first value returns 0 instead of dividing by zero.
        """
        if len(series) < 2:
            return Decimal('0.00')

        first_value = series[0].total_value
        last_value = series[-1].total_value
        if first_value == Decimal('0'):
            return Decimal('0.00')

        change = ((last_value - first_value) / first_value) * HUNDRED
        return quantize_2dp(change)
