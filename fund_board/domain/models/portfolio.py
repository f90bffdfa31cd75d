"""
DOMAIN MODELS — PORTFOLIO & PnL

Immutable structures representing fund positions and portfolio snapshots.
No database access. No quote fetching.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fund_board.domain.models.entities import FundHolding, NavObservation


@dataclass(frozen=True)
class FundPosition:
    """
    A holding valued at its most recent NAV.
    Without any NAV on record the holding is valued at cost.
    """
    holding: FundHolding
    latest: Optional[NavObservation] = None

    @property
    def total_cost(self) -> Decimal:
        return self.holding.total_cost

    @property
    def nav(self) -> Decimal:
        return self.latest.nav if self.latest else Decimal('0')

    @property
    def daily_change_pct(self) -> Decimal:
        return self.latest.daily_change_pct if self.latest else Decimal('0')

    @property
    def last_update(self) -> Optional[date]:
        return self.latest.date if self.latest else None

    @property
    def current_value(self) -> Decimal:
        if self.latest is None:
            return self.total_cost
        return self.latest.nav * self.holding.shares

    @property
    def profit(self) -> Decimal:
        return self.current_value - self.total_cost

    @property
    def profit_rate(self) -> Decimal:
        if self.total_cost <= 0:
            return Decimal('0')
        return (self.profit / self.total_cost) * Decimal('100')


@dataclass(frozen=True)
class PortfolioSnapshot:
    """
    Snapshot of the entire portfolio at the latest NAV of each fund.
    """
    positions: List[FundPosition]

    @property
    def fund_count(self) -> int:
        return len(self.positions)

    @property
    def total_cost(self) -> Decimal:
        return sum((p.total_cost for p in self.positions), Decimal('0'))

    @property
    def total_value(self) -> Decimal:
        return sum((p.current_value for p in self.positions), Decimal('0'))

    @property
    def total_profit(self) -> Decimal:
        return self.total_value - self.total_cost

    @property
    def total_profit_rate(self) -> Decimal:
        if self.total_cost <= 0:
            return Decimal('0')
        return (self.total_profit / self.total_cost) * Decimal('100')

    @property
    def profit_count(self) -> int:
        return sum(1 for p in self.positions if p.profit >= 0)

    @property
    def loss_count(self) -> int:
        return sum(1 for p in self.positions if p.profit < 0)
