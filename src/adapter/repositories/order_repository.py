from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.order_repository import IOrderRepository, OrderSummary
from src.domain.base import utcnow
from src.domain.entities import Order, OrderStatus


class OrderRepository(IOrderRepository):
    """Order repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_in_farm(
        self, order_id: UUID, farm_id: UUID, for_update: bool = False
    ) -> Optional[Order]:
        """Get order only if it belongs to the farm"""
        stmt = select(Order).where(Order.id == order_id, Order.farm_id == farm_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_farm(
        self,
        farm_id: UUID,
        status: Optional[OrderStatus] = None,
        counterparty_id: Optional[UUID] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        """Orders of a farm, newest first"""
        stmt = select(Order).where(Order.farm_id == farm_id)
        if status is not None:
            stmt = stmt.where(Order.status == status)
        if counterparty_id is not None:
            stmt = stmt.where(Order.counterparty_id == counterparty_id)
        stmt = (
            stmt.order_by(col(Order.order_date).desc(), col(Order.created_at).desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_counterparty(self, farm_id: UUID, party_id: UUID) -> int:
        """Number of farm orders referencing the party"""
        stmt = select(func.count()).select_from(Order).where(
            Order.farm_id == farm_id, Order.counterparty_id == party_id
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def create(self, order: Order) -> Order:
        """Create a new order header"""
        self.session.add(order)
        await self.session.flush()
        return order

    async def update(self, order: Order) -> Order:
        """Update an order header"""
        order.updated_at = utcnow()
        self.session.add(order)
        await self.session.flush()
        return order

    async def summarize_by_counterparties(
        self, farm_id: UUID, party_ids: Iterable[UUID]
    ) -> Dict[UUID, OrderSummary]:
        """Order count, revenue and last order date per counterparty in the farm"""
        ids = list(party_ids)
        if not ids:
            return {}
        stmt = (
            select(
                Order.counterparty_id,
                func.count(Order.id),
                func.sum(Order.total),
                func.max(Order.order_date),
            )
            .where(Order.farm_id == farm_id, col(Order.counterparty_id).in_(ids))
            .group_by(Order.counterparty_id)
        )
        result = await self.session.exec(stmt)
        return {
            party_id: OrderSummary(
                order_count=count,
                revenue=Decimal(str(revenue or 0)),
                last_order_date=last_order_date,
            )
            for party_id, count, revenue, last_order_date in result.all()
        }
