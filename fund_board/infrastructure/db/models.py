"""
Database Models (SQLAlchemy ORM)
Fund holdings and daily NAV rows, written by the quote poller and read here
"""

from sqlalchemy import (
    Column, Integer, String, Numeric, Date, DateTime, Index, UniqueConstraint
)

from fund_board.infrastructure.db.database import Base
from fund_board.utils.time import now_market_naive


class FundModel(Base):
    """A user's holding in one fund"""
    __tablename__ = "funds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fund_code = Column(String(20), nullable=False, index=True)
    fund_name = Column(String(100), nullable=False, default="")
    cost = Column(Numeric(10, 4), nullable=False, default=0)
    shares = Column(Numeric(12, 4), nullable=False, default=0)
    note = Column(String(200), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_market_naive)
    updated_at = Column(
        DateTime, nullable=False, default=now_market_naive, onupdate=now_market_naive
    )


class DailyDataModel(Base):
    """Published NAV for a fund on one date - upserted per (fund_code, date)"""
    __tablename__ = "daily_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fund_code = Column(String(20), nullable=False)
    nav = Column(Numeric(8, 4), nullable=False, default=0)
    daily_change = Column(Numeric(8, 4), nullable=False, default=0)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_market_naive)

    __table_args__ = (
        UniqueConstraint('fund_code', 'date', name='uq_daily_data_fund_date'),
        Index('ix_daily_data_lookup', 'fund_code', 'date'),
    )
