"""テスト共通フィクスチャ.

DBはaiosqliteのインメモリSQLiteを使用し、テストごとにテーブルを作成する。
アプリ側のセッション依存は dependency_overrides で差し替える。
"""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

# Settings は import 時に読み込まれるため、アプリのimportより前に設定する
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_PORT", "5432")
os.environ.setdefault("POSTGRES_USER", "company")
os.environ.setdefault("POSTGRES_PASSWORD", "company")
os.environ.setdefault("POSTGRES_DATABASE", "company_test")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from company_api.company.service import CompanyService
from company_api.database.database import get_async_db_session
from company_api.database.model import Company
from company_api.database.repository import CompanyRepository
from company_api.main import app

SEED_TIME = datetime(2025, 6, 5, tzinfo=UTC)


class FakeClock:
    """呼び出しごとに1分ずつ進む時計."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


def naive(value: datetime) -> datetime:
    """SQLiteはタイムゾーンを保持しないため、比較用にnaiveへ揃える."""
    return value.replace(tzinfo=None)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """テーブル作成済みのインメモリSQLiteエンジン."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """テスト用DBセッション."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(SEED_TIME)


@pytest.fixture
def repo(session: AsyncSession) -> CompanyRepository:
    return CompanyRepository(session)


@pytest.fixture
def service(repo: CompanyRepository, clock: FakeClock) -> CompanyService:
    return CompanyService(company_repo=repo, clock=clock)


@pytest.fixture
async def seeded(engine: AsyncEngine) -> dict[str, Company]:
    """初期データと同じ3社を登録し、ティッカー -> Company で返す.

    専用セッションで登録してクローズするため、返すCompanyはデタッチ済み。
    """
    companies = [
        Company(
            name="Apple Inc.",
            stock_ticker="AAPL",
            exchange="NASDAQ",
            isin="US0378331005",
            website="http://www.apple.com",
            created_at=SEED_TIME,
            updated_at=SEED_TIME,
        ),
        Company(
            name="British Airways Plc",
            stock_ticker="BAIRY",
            exchange="Pink Sheets",
            isin="US1104193065",
            created_at=SEED_TIME,
            updated_at=SEED_TIME,
        ),
        Company(
            name="Heineken NV",
            stock_ticker="HEIA",
            exchange="Euronext Amsterdam",
            isin="NL0000009165",
            created_at=SEED_TIME,
            updated_at=SEED_TIME,
        ),
    ]
    async with AsyncSession(engine, expire_on_commit=False) as session:
        session.add_all(companies)
        await session.commit()
        for company in companies:
            await session.refresh(company)
    return {c.stock_ticker: c for c in companies}


@pytest.fixture
async def async_client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """アプリに直接接続するHTTPクライアント."""

    async def override_session() -> AsyncGenerator[AsyncSession]:
        async with AsyncSession(engine) as session:
            yield session

    app.dependency_overrides[get_async_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
