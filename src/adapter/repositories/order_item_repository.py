from typing import Iterable, List
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.order_item_repository import IOrderItemRepository
from src.domain.entities import OrderItem


class OrderItemRepository(IOrderItemRepository):
    """OrderItem repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_order_ids(self, order_ids: Iterable[UUID]) -> List[OrderItem]:
        """Line items of the given orders, in position order"""
        ids = list(order_ids)
        if not ids:
            return []
        stmt = (
            select(OrderItem)
            .where(col(OrderItem.order_id).in_(ids))
            .order_by(OrderItem.order_id, OrderItem.position)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create_many(self, items: List[OrderItem]) -> List[OrderItem]:
        """Insert line items"""
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def delete_by_order(self, order_id: UUID) -> None:
        """Delete every line item of an order"""
        await self.session.execute(delete(OrderItem).where(OrderItem.order_id == order_id))
