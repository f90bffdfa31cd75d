from datetime import date
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fund_board.infrastructure.db.database import Base, get_db
from fund_board.infrastructure.db.models import DailyDataModel, FundModel
from fund_board.api.routes import funds, health, history


@pytest.fixture()
async def db_engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture()
async def app(db_session) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(history.router, prefix="/api", tags=["History"])
    app.include_router(funds.router, prefix="/api", tags=["Funds"])

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def add_fund(db_session):
    """Insert a fund row"""
    async def _add(fund_code: str, cost: str, shares: str, fund_name: str = "", note=None):
        model = FundModel(
            fund_code=fund_code,
            fund_name=fund_name or f"Fund {fund_code}",
            cost=Decimal(cost),
            shares=Decimal(shares),
            note=note,
        )
        db_session.add(model)
        await db_session.commit()
        return model
    return _add


@pytest.fixture()
def add_navs(db_session):
    """Insert NAV rows as (iso_date, nav) or (iso_date, nav, daily_change)"""
    async def _add(fund_code: str, rows):
        for row in rows:
            day, nav = row[0], row[1]
            change = row[2] if len(row) > 2 else "0"
            db_session.add(DailyDataModel(
                fund_code=fund_code,
                nav=Decimal(nav),
                daily_change=Decimal(change),
                date=date.fromisoformat(day),
            ))
        await db_session.commit()
    return _add
