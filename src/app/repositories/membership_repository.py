from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Membership


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_farm(
        self, user_id: UUID, farm_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and farm"""
        pass

    @abstractmethod
    async def get_by_farm_id(self, farm_id: UUID) -> List[Membership]:
        """Get all memberships for a farm"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass
