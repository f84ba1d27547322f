"""
Validate Order Use Case

Runs the integrity rules against a draft without writing anything.
"""

from decimal import Decimal
from uuid import UUID

from libs.result import Result, Return
from src.app.services.integrity_validator import validate_order
from src.app.services.unit_of_work import UnitOfWork
from src.domain.value_objects import OrderDraft

from .dtos import ValidationPreviewResponse
from .references import load_order_references


class ValidateOrderUseCase:
    def __init__(self, uow: UnitOfWork, tolerance: Decimal):
        self.uow = uow
        self.tolerance = tolerance

    async def execute(self, farm_id: UUID, draft: OrderDraft) -> Result[ValidationPreviewResponse]:
        async with self.uow:
            references = await load_order_references(self.uow, farm_id, draft)

        outcome = validate_order(farm_id, draft, references, self.tolerance)
        return Return.ok(
            ValidationPreviewResponse(
                valid=outcome.is_valid,
                violations=[violation.to_dict() for violation in outcome.violations],
            )
        )
