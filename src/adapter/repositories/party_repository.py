from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.party_repository import IPartyRepository, PartyFilter
from src.domain.base import utcnow
from src.domain.entities import ContactChannel, Party, PartyContact, PartyRole, PartyRoleType


class PartyRepository(IPartyRepository):
    """Party repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, party_id: UUID) -> Optional[Party]:
        """Get party by ID regardless of farm"""
        stmt = select(Party).where(Party.id == party_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_in_farm(self, party_id: UUID, farm_id: UUID) -> Optional[Party]:
        """Get party only if it holds at least one role in the farm"""
        in_farm = select(PartyRole.party_id).where(
            PartyRole.party_id == party_id, PartyRole.farm_id == farm_id
        )
        stmt = select(Party).where(Party.id == party_id, col(Party.id).in_(in_farm))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_farm_and_role_types(
        self,
        farm_id: UUID,
        role_types: Sequence[PartyRoleType],
        party_filter: PartyFilter,
    ) -> List[Party]:
        """Parties holding any of role_types in the farm, filtered server-side"""
        holders = select(PartyRole.party_id).where(
            PartyRole.farm_id == farm_id,
            col(PartyRole.role_type).in_(list(role_types)),
        )
        stmt = select(Party).where(col(Party.id).in_(holders))

        if party_filter.kind is not None:
            stmt = stmt.where(Party.kind == party_filter.kind)

        if party_filter.email:
            with_email = select(PartyContact.party_id).where(
                PartyContact.channel == ContactChannel.email,
                func.lower(PartyContact.value) == party_filter.email.strip().lower(),
            )
            stmt = stmt.where(col(Party.id).in_(with_email))

        stmt = (
            stmt.order_by(Party.display_name, Party.id)
            .offset(party_filter.offset)
            .limit(party_filter.limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, party: Party) -> Party:
        """Create a new party"""
        self.session.add(party)
        await self.session.flush()
        return party

    async def update(self, party: Party) -> Party:
        """Update display attributes"""
        party.updated_at = utcnow()
        self.session.add(party)
        await self.session.flush()
        return party
