from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.membership_repository import IMembershipRepository
from src.domain.entities import Membership


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_farm(
        self, user_id: UUID, farm_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and farm"""
        stmt = select(Membership).where(
            Membership.user_id == user_id, Membership.farm_id == farm_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_farm_id(self, farm_id: UUID) -> List[Membership]:
        """Get all memberships for a farm"""
        stmt = (
            select(Membership)
            .where(Membership.farm_id == farm_id)
            .order_by(Membership.joined_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership
