from abc import ABC, abstractmethod
from typing import Iterable, List
from uuid import UUID

from src.domain.entities import CatalogItem


class ICatalogItemRepository(ABC):
    """CatalogItem repository interface - application layer"""

    @abstractmethod
    async def get_by_ids_in_farm(
        self, farm_id: UUID, item_ids: Iterable[UUID], for_update: bool = False
    ) -> List[CatalogItem]:
        """Catalog items with the given ids that belong to the farm"""
        pass

    @abstractmethod
    async def create(self, item: CatalogItem) -> CatalogItem:
        """Create a new catalog item"""
        pass
