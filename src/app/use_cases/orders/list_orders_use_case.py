"""
List Orders Use Case
"""

from typing import Dict, List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import OrderItem, OrderStatus

from .dtos import OrderListResponse, OrderResponse


class ListOrdersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        farm_id: UUID,
        status: Optional[OrderStatus] = None,
        counterparty_id: Optional[UUID] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[OrderListResponse]:
        async with self.uow:
            orders = await self.uow.orders.list_by_farm(
                farm_id,
                status=status,
                counterparty_id=counterparty_id,
                limit=limit,
                offset=offset,
            )
            items = await self.uow.order_items.get_by_order_ids([o.id for o in orders])

            items_by_order: Dict[UUID, List[OrderItem]] = {}
            for item in items:
                items_by_order.setdefault(item.order_id, []).append(item)

            return Return.ok(
                OrderListResponse(
                    orders=[
                        OrderResponse.from_entities(order, items_by_order.get(order.id, []))
                        for order in orders
                    ]
                )
            )
