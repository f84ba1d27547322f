"""
Create Order Use Case

Validates an order draft, then hands it to the transactional writer.
"""

import logging
from decimal import Decimal
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.integrity_validator import Invalid, validate_order
from src.app.services.order_writer import OrderWriter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.value_objects import OrderDraft

from .dtos import OrderResponse
from .references import load_order_references

logger = logging.getLogger(__name__)


def validation_failed(outcome: Invalid) -> Error:
    return Error(
        "VALIDATION_FAILED",
        f"Order failed {len(outcome.violations)} integrity check(s)",
        {"violations": outcome.to_list()},
    )


class CreateOrderUseCase:
    """
    Business Rules:
    - Every violation is reported; any violation blocks the write
    - Counterparty and catalog items must belong to the farm
    - Header and items are written atomically (see OrderWriter)
    """

    def __init__(self, uow: UnitOfWork, tolerance: Decimal, write_timeout: float):
        self.uow = uow
        self.tolerance = tolerance
        self.write_timeout = write_timeout

    async def execute(
        self, farm_id: UUID, actor_user_id: UUID, draft: OrderDraft
    ) -> Result[OrderResponse]:
        async with self.uow:
            references = await load_order_references(self.uow, farm_id, draft)

            outcome = validate_order(farm_id, draft, references, self.tolerance)
            if isinstance(outcome, Invalid):
                logger.info(
                    "Order rejected in farm %s: %s",
                    farm_id,
                    ", ".join(v.rule for v in outcome.violations),
                )
                return Return.err(validation_failed(outcome))

            writer = OrderWriter(self.uow, self.write_timeout)
            written = await writer.write_order(farm_id, draft, created_by=actor_user_id)
            if written.is_err():
                return written

            order, items = written.value
            return Return.ok(OrderResponse.from_entities(order, items))
