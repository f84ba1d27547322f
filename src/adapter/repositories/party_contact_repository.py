from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.party_contact_repository import IPartyContactRepository
from src.domain.base import utcnow
from src.domain.entities import ContactChannel, PartyContact


class PartyContactRepository(IPartyContactRepository):
    """PartyContact repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, contact_id: UUID) -> Optional[PartyContact]:
        """Get contact by ID"""
        stmt = select(PartyContact).where(PartyContact.id == contact_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_party_ids(self, party_ids: Iterable[UUID]) -> List[PartyContact]:
        """All contacts of the given parties"""
        ids = list(party_ids)
        if not ids:
            return []
        stmt = (
            select(PartyContact)
            .where(col(PartyContact.party_id).in_(ids))
            .order_by(PartyContact.created_at, PartyContact.id)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_primary(
        self, party_id: UUID, channel: ContactChannel
    ) -> Optional[PartyContact]:
        """Current primary contact of a channel"""
        stmt = select(PartyContact).where(
            PartyContact.party_id == party_id,
            PartyContact.channel == channel,
            col(PartyContact.is_primary).is_(True),
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, contact: PartyContact) -> PartyContact:
        """Create a new contact"""
        self.session.add(contact)
        await self.session.flush()
        return contact

    async def mark_primary(
        self, party_id: UUID, channel: ContactChannel, contact_id: UUID
    ) -> None:
        """Demote the other primaries of (party, channel), then promote contact_id"""
        now = utcnow()
        # Demote first so the partial unique index never sees two primaries
        demote = (
            update(PartyContact)
            .where(
                PartyContact.party_id == party_id,
                PartyContact.channel == channel,
                PartyContact.id != contact_id,
                col(PartyContact.is_primary).is_(True),
            )
            .values(is_primary=False, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(demote)

        promote = (
            update(PartyContact)
            .where(PartyContact.id == contact_id, PartyContact.party_id == party_id)
            .values(is_primary=True, updated_at=now)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(promote)
