"""
Funds API Routes
Read-only list of holdings valued at their latest NAV
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from fund_board.api.formatting import fixed_2dp
from fund_board.api.schemas import CamelModel
from fund_board.domain.exceptions import ValidationError
from fund_board.domain.models import FundPosition
from fund_board.infrastructure.db.database import get_db
from fund_board.infrastructure.db.repositories.daily_data_repository import DailyDataRepository
from fund_board.infrastructure.db.repositories.fund_repository import FundRepository

logger = logging.getLogger(__name__)
router = APIRouter()


class FundResponse(CamelModel):
    id: int
    fund_code: str
    fund_name: str
    cost: float
    shares: float
    note: Optional[str] = None
    nav: float
    daily_change: float
    current_value: str
    profit: str
    profit_rate: str
    last_update_date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@router.get("/funds", response_model=List[FundResponse])
async def list_funds(db: AsyncSession = Depends(get_db)):
    """
    All holdings with current value and profit at the latest NAV
    """
    try:
        fund_repo = FundRepository(db)
        models = await fund_repo.list_all()
        latest = await DailyDataRepository(db).get_latest(
            list(dict.fromkeys(m.fund_code for m in models))
        )

        funds = []
        for model in models:
            position = FundPosition(
                holding=fund_repo.to_domain(model),
                latest=latest.get(model.fund_code),
            )
            last_update = position.last_update

            funds.append(FundResponse(
                id=model.id,
                fund_code=model.fund_code,
                fund_name=model.fund_name or "",
                cost=float(position.holding.cost_per_share),
                shares=float(position.holding.shares),
                note=model.note,
                nav=float(position.nav),
                daily_change=float(position.daily_change_pct),
                current_value=fixed_2dp(position.current_value),
                profit=fixed_2dp(position.profit),
                profit_rate=fixed_2dp(position.profit_rate),
                last_update_date=last_update.isoformat() if last_update else None,
                created_at=model.created_at.isoformat() if model.created_at else None,
                updated_at=model.updated_at.isoformat() if model.updated_at else None,
            ))

        return funds

    except ValidationError as e:
        logger.error(f"Invalid stored fund data: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Invalid stored data: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Error fetching funds: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to fetch funds: {str(e)}"
        )
