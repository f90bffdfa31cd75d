"""
Portfolio Snapshot Engine
Values each holding at its latest NAV and totals the portfolio
"""

from typing import Mapping, Optional, Sequence

from fund_board.domain.models import (
    FundHolding,
    FundPosition,
    NavObservation,
    PortfolioSnapshot,
)


class PortfolioSnapshotEngine:
    """Pure valuation of holdings against their most recent NAV rows"""

    def build(
        self,
        funds: Sequence[FundHolding],
        latest_by_fund: Mapping[str, Optional[NavObservation]],
    ) -> PortfolioSnapshot:
        positions = [
            FundPosition(holding=fund, latest=latest_by_fund.get(fund.fund_code))
            for fund in funds
        ]
        return PortfolioSnapshot(positions=positions)

