"""
History & Stats API Routes
Portfolio value series with drawdown / return stats, and the latest-NAV summary
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from fund_board.api.formatting import fixed_2dp, iso_or_empty
from fund_board.api.schemas import CamelModel
from fund_board.config import settings
from fund_board.domain.exceptions import ValidationError
from fund_board.domain.models import HistoryPeriod, HistoryResult, PortfolioSnapshot
from fund_board.domain.services.history_engine import PortfolioHistoryEngine
from fund_board.domain.services.snapshot_engine import PortfolioSnapshotEngine
from fund_board.infrastructure.db.database import get_db
from fund_board.infrastructure.db.repositories.daily_data_repository import DailyDataRepository
from fund_board.infrastructure.db.repositories.fund_repository import FundRepository

logger = logging.getLogger(__name__)
router = APIRouter()

history_engine = PortfolioHistoryEngine()
snapshot_engine = PortfolioSnapshotEngine()


class HistoryPointResponse(CamelModel):
    date: str
    total_value: str
    total_cost: str
    profit: str
    nav: float


class HistoryStatsResponse(CamelModel):
    max_drawdown: str
    max_drawdown_start: str
    max_drawdown_end: str
    period_return: str
    data_points: int


class HistoryResponse(CamelModel):
    data: List[HistoryPointResponse]
    stats: HistoryStatsResponse


class StatsResponse(CamelModel):
    total_cost: str
    total_value: str
    total_profit: str
    total_profit_rate: str
    fund_count: int
    profit_count: int
    loss_count: int


def history_to_response(result: HistoryResult) -> HistoryResponse:
    stats = result.stats
    return HistoryResponse(
        data=[
            HistoryPointResponse(
                date=point.date.isoformat(),
                total_value=fixed_2dp(point.total_value),
                total_cost=fixed_2dp(point.total_cost),
                profit=fixed_2dp(point.profit),
                nav=float(point.nav),
            )
            for point in result.series
        ],
        stats=HistoryStatsResponse(
            max_drawdown=fixed_2dp(stats.max_drawdown_pct),
            max_drawdown_start=iso_or_empty(stats.max_drawdown_start),
            max_drawdown_end=iso_or_empty(stats.max_drawdown_end),
            period_return=fixed_2dp(stats.period_return_pct),
            data_points=stats.point_count,
        ),
    )


def snapshot_to_response(snapshot: PortfolioSnapshot) -> StatsResponse:
    return StatsResponse(
        total_cost=fixed_2dp(snapshot.total_cost),
        total_value=fixed_2dp(snapshot.total_value),
        total_profit=fixed_2dp(snapshot.total_profit),
        total_profit_rate=fixed_2dp(snapshot.total_profit_rate),
        fund_count=snapshot.fund_count,
        profit_count=snapshot.profit_count,
        loss_count=snapshot.loss_count,
    )


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    fund_code: Optional[str] = Query(None, alias="fundCode"),
    period: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """
    Combined portfolio value per date with max drawdown and period return

    fundCode narrows the series to one fund; period is 1m, 3m, 6m, 1y or all
    (unknown values are treated as all).
    """
    resolved_period = HistoryPeriod.parse(period or settings.DEFAULT_HISTORY_PERIOD)

    try:
        holdings = await FundRepository(db).list_holdings(fund_code)
        fund_codes = list(dict.fromkeys(h.fund_code for h in holdings))
        observations = await DailyDataRepository(db).get_history(fund_codes)

        result = history_engine.build(holdings, observations, resolved_period)
        return history_to_response(result)

    except ValidationError as e:
        logger.error(f"Invalid stored data for history: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Invalid stored data: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Error fetching history: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch history: {str(e)}"
        )


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: AsyncSession = Depends(get_db)):
    """
    Portfolio totals at each fund's latest NAV

    Funds without any NAV row count at cost.
    """
    try:
        holdings = await FundRepository(db).list_holdings()
        latest = await DailyDataRepository(db).get_latest(
            list(dict.fromkeys(h.fund_code for h in holdings))
        )
        snapshot = snapshot_engine.build(holdings, latest)
        return snapshot_to_response(snapshot)

    except ValidationError as e:
        logger.error(f"Invalid stored data for stats: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Invalid stored data: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Error fetching stats: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch stats: {str(e)}"
        )
