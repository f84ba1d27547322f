from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.farm_repository import IFarmRepository
from src.domain.entities import Farm


class FarmRepository(IFarmRepository):
    """Farm repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, farm_id: UUID) -> Optional[Farm]:
        """Get farm by ID"""
        stmt = select(Farm).where(Farm.id == farm_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, farm: Farm) -> Farm:
        """Create a new farm"""
        self.session.add(farm)
        await self.session.flush()
        await self.session.refresh(farm)
        return farm

    async def update(self, farm: Farm) -> Farm:
        """Update existing farm"""
        self.session.add(farm)
        await self.session.flush()
        await self.session.refresh(farm)
        return farm
