"""
Get Order Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import OrderResponse


class GetOrderUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, farm_id: UUID, order_id: UUID) -> Result[OrderResponse]:
        async with self.uow:
            order = await self.uow.orders.get_in_farm(order_id, farm_id)
            if order is None:
                return Return.err(Error("NOT_FOUND", "Order not found"))

            items = await self.uow.order_items.get_by_order_ids([order.id])
            return Return.ok(OrderResponse.from_entities(order, items))
