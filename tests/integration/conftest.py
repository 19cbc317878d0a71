from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  (registers tables on SQLModel.metadata)
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_session
from src.domain.account import Account
from src.adapter.repositories.catalog_repository import SqlAlchemyCatalogRepository
from src.adapter.repositories.ledger_repository import SqlAlchemyLedgerRepository


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a file-backed SQLite database so separate sessions use separate connections"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'airtime_test.db'}"

    engine = create_async_engine(
        test_db_url, echo=False, future=True, connect_args={"timeout": 30}
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_catalog(session_factory, test_data):
    """Insert the catalog groups from tests/fixtures/data/catalog.json"""
    async with session_factory() as session:
        catalog_repo = SqlAlchemyCatalogRepository(session)
        for group in test_data.catalog_groups():
            main_category = await catalog_repo.get_or_create_main_category(group["main_category"])
            sub_category = await catalog_repo.get_or_create_sub_category(
                group["sub_category"], main_category.id
            )
            period = await catalog_repo.get_or_create_period(group["period"], sub_category.id)
            for offer in group["offers"]:
                await catalog_repo.create_offer(
                    Decimal(offer["quantity"]), Decimal(offer["price"]), period.id
                )
        await session.commit()
    return test_data.catalog_groups()


@pytest_asyncio.fixture
async def create_account(session_factory):
    """Factory fixture: register an account with a starting balance"""

    async def _create(phone_number: str, balance="0", name: str = "Test Subscriber"):
        async with session_factory() as session:
            session.add(
                Account(phone_number=phone_number, name=name, balance=Decimal(str(balance)))
            )
            await session.commit()

    return _create


@pytest_asyncio.fixture
async def read_balance(session_factory):
    """Read a balance through a fresh session (never a stale identity map)"""

    async def _read(phone_number: str):
        async with session_factory() as session:
            return await SqlAlchemyLedgerRepository(session).read_balance(phone_number)

    return _read


@pytest_asyncio.fixture
async def list_purchases(session_factory):
    async def _list(phone_number: str):
        async with session_factory() as session:
            return await SqlAlchemyLedgerRepository(session).list_purchases(phone_number)

    return _list


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
