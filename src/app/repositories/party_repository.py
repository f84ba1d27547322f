from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Party, PartyKind, PartyRoleType


@dataclass(frozen=True)
class PartyFilter:
    """Narrowing applied in SQL to a farm/role-type party query"""

    kind: Optional[PartyKind] = None
    email: Optional[str] = None
    limit: int = 50
    offset: int = 0


class IPartyRepository(ABC):
    """Party repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, party_id: UUID) -> Optional[Party]:
        """Get party by ID regardless of farm"""
        pass

    @abstractmethod
    async def get_in_farm(self, party_id: UUID, farm_id: UUID) -> Optional[Party]:
        """Get party only if it holds at least one role in the farm"""
        pass

    @abstractmethod
    async def find_by_farm_and_role_types(
        self,
        farm_id: UUID,
        role_types: Sequence[PartyRoleType],
        party_filter: PartyFilter,
    ) -> List[Party]:
        """Parties holding any of role_types in the farm, filtered server-side"""
        pass

    @abstractmethod
    async def create(self, party: Party) -> Party:
        """Create a new party"""
        pass

    @abstractmethod
    async def update(self, party: Party) -> Party:
        """Update display attributes"""
        pass
