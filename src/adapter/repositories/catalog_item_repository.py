from typing import Iterable, List
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.catalog_item_repository import ICatalogItemRepository
from src.domain.entities import CatalogItem


class CatalogItemRepository(ICatalogItemRepository):
    """CatalogItem repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_ids_in_farm(
        self, farm_id: UUID, item_ids: Iterable[UUID], for_update: bool = False
    ) -> List[CatalogItem]:
        """Catalog items with the given ids that belong to the farm"""
        ids = list(item_ids)
        if not ids:
            return []
        stmt = select(CatalogItem).where(
            col(CatalogItem.id).in_(ids), CatalogItem.farm_id == farm_id
        )
        if for_update:
            # Compiled away on SQLite, row locks on PostgreSQL
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, item: CatalogItem) -> CatalogItem:
        """Create a new catalog item"""
        self.session.add(item)
        await self.session.flush()
        return item
