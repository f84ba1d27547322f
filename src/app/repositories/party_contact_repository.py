from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from src.domain.entities import ContactChannel, PartyContact


class IPartyContactRepository(ABC):
    """PartyContact repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, contact_id: UUID) -> Optional[PartyContact]:
        """Get contact by ID"""
        pass

    @abstractmethod
    async def get_by_party_ids(self, party_ids: Iterable[UUID]) -> List[PartyContact]:
        """All contacts of the given parties"""
        pass

    @abstractmethod
    async def get_primary(
        self, party_id: UUID, channel: ContactChannel
    ) -> Optional[PartyContact]:
        """Current primary contact of a channel"""
        pass

    @abstractmethod
    async def create(self, contact: PartyContact) -> PartyContact:
        """Create a new contact"""
        pass

    @abstractmethod
    async def mark_primary(
        self, party_id: UUID, channel: ContactChannel, contact_id: UUID
    ) -> None:
        """Demote the other primaries of (party, channel), then promote contact_id"""
        pass
