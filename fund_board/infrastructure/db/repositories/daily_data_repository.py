"""
Daily Data Repository
Read access to per-fund daily NAV rows
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Dict, List, Optional, Sequence

from fund_board.infrastructure.db.models import DailyDataModel
from fund_board.domain.models import NavObservation


class DailyDataRepository:
    """Repository for DailyData (NAV history)"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def get_history(
        self,
        fund_codes: Sequence[str],
    ) -> Dict[str, List[NavObservation]]:
        """
        Get the full NAV history of each fund

        Args:
            fund_codes: Fund codes to load

        Returns:
            Observations per fund code, ascending by date.
            Codes without rows map to an empty list.
        """
        history: Dict[str, List[NavObservation]] = {code: [] for code in fund_codes}
        if not history:
            return history

        result = await self.session.execute(
            select(DailyDataModel)
            .where(DailyDataModel.fund_code.in_(list(history)))
            .order_by(DailyDataModel.date, DailyDataModel.id)
        )

        for model in result.scalars().all():
            history[model.fund_code].append(self._to_domain(model))

        return history

    async def get_latest(
        self,
        fund_codes: Sequence[str],
    ) -> Dict[str, Optional[NavObservation]]:
        """
        Get the most recent NAV row of each fund

        Args:
            fund_codes: Fund codes to load

        Returns:
            Latest observation per fund code (None when the fund has no rows)
        """
        latest: Dict[str, Optional[NavObservation]] = {code: None for code in fund_codes}
        if not latest:
            return latest

        latest_dates = (
            select(
                DailyDataModel.fund_code,
                func.max(DailyDataModel.date).label('max_date')
            )
            .where(DailyDataModel.fund_code.in_(list(latest)))
            .group_by(DailyDataModel.fund_code)
            .subquery()
        )

        result = await self.session.execute(
            select(DailyDataModel)
            .join(
                latest_dates,
                (DailyDataModel.fund_code == latest_dates.c.fund_code)
                & (DailyDataModel.date == latest_dates.c.max_date)
            )
        )

        for model in result.scalars().all():
            latest[model.fund_code] = self._to_domain(model)

        return latest

    @staticmethod
    def _to_domain(model: DailyDataModel) -> NavObservation:
        """Convert database model to domain entity"""
        return NavObservation(
            fund_code=model.fund_code,
            date=model.date,
            nav=model.nav,
            daily_change_pct=model.daily_change,
        )
