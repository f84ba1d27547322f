from decimal import Decimal
from typing import Optional
from uuid import UUID

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import enable_sqlite_foreign_keys, get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import create_access_token
from src.domain.entities import (
    CatalogItem,
    Farm,
    FarmStatus,
    Membership,
    MembershipRole,
    MembershipStatus,
    User,
    UserStatus,
)


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class Seeder:
    """
    Inserts rows directly and returns plain ids.

    Requests share the session and roll it back on exit, which expires
    every loaded entity; tests keep ids, never entities.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def user(self, email: str, status: UserStatus = UserStatus.active) -> UUID:
        user = User(email=email, status=status)
        self.session.add(user)
        await self.session.commit()
        return user.id

    async def farm(
        self,
        farm_name: str,
        owner_id: Optional[UUID] = None,
        status: FarmStatus = FarmStatus.active,
    ) -> UUID:
        farm = Farm(farm_name=farm_name, status=status)
        self.session.add(farm)
        await self.session.commit()
        farm_id = farm.id
        if owner_id is not None:
            await self.membership(owner_id, farm_id, MembershipRole.owner)
        return farm_id

    async def membership(
        self,
        user_id: UUID,
        farm_id: UUID,
        role: MembershipRole,
        status: MembershipStatus = MembershipStatus.active,
    ) -> UUID:
        membership = Membership(user_id=user_id, farm_id=farm_id, role=role, status=status)
        self.session.add(membership)
        await self.session.commit()
        return membership.id

    async def catalog_item(self, farm_id: UUID, name: str, unit_price: str = "15.00") -> UUID:
        item = CatalogItem(farm_id=farm_id, name=name, unit="tray", unit_price=Decimal(unit_price))
        self.session.add(item)
        await self.session.commit()
        return item.id


@pytest_asyncio.fixture
def seed(db_session):
    return Seeder(db_session)


@pytest_asyncio.fixture
def auth_headers():
    """Bearer header for a user id, as an upstream identity provider would issue"""

    def build(user_id: UUID) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return build
