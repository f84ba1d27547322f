from typing import Iterable, List
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.party_role_repository import IPartyRoleRepository
from src.domain.entities import PartyRole


class PartyRoleRepository(IPartyRoleRepository):
    """PartyRole repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_party_and_farm(
        self, party_id: UUID, farm_id: UUID, for_update: bool = False
    ) -> List[PartyRole]:
        """All roles a party holds in one farm"""
        stmt = select(PartyRole).where(
            PartyRole.party_id == party_id, PartyRole.farm_id == farm_id
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_party(self, party_id: UUID) -> List[PartyRole]:
        """Every role of a party, across farms; for internal invariant checks only"""
        stmt = select(PartyRole).where(PartyRole.party_id == party_id)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_parties_in_farm(
        self, party_ids: Iterable[UUID], farm_id: UUID
    ) -> List[PartyRole]:
        """Roles of several parties, restricted to one farm"""
        ids = list(party_ids)
        if not ids:
            return []
        stmt = (
            select(PartyRole)
            .where(col(PartyRole.party_id).in_(ids), PartyRole.farm_id == farm_id)
            .order_by(PartyRole.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, role: PartyRole) -> PartyRole:
        """Create a new role"""
        self.session.add(role)
        await self.session.flush()
        return role

    async def delete(self, role: PartyRole) -> None:
        """Delete a role"""
        await self.session.execute(delete(PartyRole).where(PartyRole.id == role.id))

