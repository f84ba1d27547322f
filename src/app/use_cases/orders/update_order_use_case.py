"""
Update Order Use Case

Replaces header and items of an existing order of the farm.
"""

import logging
from decimal import Decimal
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.integrity_validator import Invalid, validate_order
from src.app.services.order_writer import OrderWriter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.value_objects import OrderDraft

from .create_order_use_case import validation_failed
from .dtos import OrderResponse
from .references import load_order_references

logger = logging.getLogger(__name__)


class UpdateOrderUseCase:
    """An order of another farm is NOT_FOUND, exactly like a missing one"""

    def __init__(self, uow: UnitOfWork, tolerance: Decimal, write_timeout: float):
        self.uow = uow
        self.tolerance = tolerance
        self.write_timeout = write_timeout

    async def execute(
        self, farm_id: UUID, actor_user_id: UUID, order_id: UUID, draft: OrderDraft
    ) -> Result[OrderResponse]:
        async with self.uow:
            existing = await self.uow.orders.get_in_farm(order_id, farm_id)
            if existing is None:
                return Return.err(Error("NOT_FOUND", "Order not found"))

            references = await load_order_references(self.uow, farm_id, draft)

            outcome = validate_order(farm_id, draft, references, self.tolerance)
            if isinstance(outcome, Invalid):
                logger.info("Order %s update rejected in farm %s", order_id, farm_id)
                return Return.err(validation_failed(outcome))

            writer = OrderWriter(self.uow, self.write_timeout)
            written = await writer.write_order(
                farm_id, draft, created_by=actor_user_id, order_id=order_id
            )
            if written.is_err():
                return written

            order, items = written.value
            return Return.ok(OrderResponse.from_entities(order, items))
