from abc import ABC, abstractmethod
from typing import Iterable, List
from uuid import UUID

from src.domain.entities import PartyRole


class IPartyRoleRepository(ABC):
    """PartyRole repository interface - application layer"""

    @abstractmethod
    async def get_by_party_and_farm(
        self, party_id: UUID, farm_id: UUID, for_update: bool = False
    ) -> List[PartyRole]:
        """All roles a party holds in one farm"""
        pass

    @abstractmethod
    async def get_by_party(self, party_id: UUID) -> List[PartyRole]:
        """Every role of a party, across farms; for internal invariant checks only"""
        pass

    @abstractmethod
    async def get_by_parties_in_farm(
        self, party_ids: Iterable[UUID], farm_id: UUID
    ) -> List[PartyRole]:
        """Roles of several parties, restricted to one farm"""
        pass

    @abstractmethod
    async def create(self, role: PartyRole) -> PartyRole:
        """Create a new role"""
        pass

    @abstractmethod
    async def delete(self, role: PartyRole) -> None:
        """Delete a role"""
        pass
