"""
Fund Repository
Read access to fund holdings
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from fund_board.infrastructure.db.models import FundModel
from fund_board.domain.models import FundHolding


class FundRepository:
    """Repository for fund holdings"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def list_all(self, fund_code: Optional[str] = None) -> List[FundModel]:
        """
        Get fund rows in insertion order

        Args:
            fund_code: Restrict to one fund code (optional)

        Returns:
            List of FundModel rows
        """
        query = select(FundModel).order_by(FundModel.id)
        if fund_code:
            query = query.where(FundModel.fund_code == fund_code)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_holdings(self, fund_code: Optional[str] = None) -> List[FundHolding]:
        """Same as list_all, converted to domain holdings"""
        models = await self.list_all(fund_code)
        return [self.to_domain(m) for m in models]

    @staticmethod
    def to_domain(model: FundModel) -> FundHolding:
        """Convert database model to domain entity"""
        return FundHolding(
            fund_code=model.fund_code,
            cost_per_share=model.cost,
            shares=model.shares,
            fund_name=model.fund_name or "",
        )
