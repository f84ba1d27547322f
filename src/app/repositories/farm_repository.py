from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Farm


class IFarmRepository(ABC):
    """Farm repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, farm_id: UUID) -> Optional[Farm]:
        """Get farm by ID"""
        pass

    @abstractmethod
    async def create(self, farm: Farm) -> Farm:
        """Create a new farm"""
        pass

    @abstractmethod
    async def update(self, farm: Farm) -> Farm:
        """Update existing farm"""
        pass
