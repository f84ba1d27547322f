"""
Create Farm Use Case

Creates a farm and makes the caller its owner.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    Farm,
    Membership,
    MembershipRole,
    MembershipStatus,
)

from .dtos import CreateFarmCommand, FarmResponse


class CreateFarmUseCase:
    """
    Use case for creating a farm.

    Business Logic:
    1. Create Farm (status=active)
    2. Create Membership with role=owner, status=active
    3. Create AuditEvent with action=farm_created
    4. Commit atomically
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, command: CreateFarmCommand) -> Result[FarmResponse]:
        async with self.uow:
            farm_name = command.farm_name.strip()
            if not farm_name:
                return Return.err(Error("VALIDATION_FAILED", "Farm name is required"))

            farm = await self.uow.farms.create(
                Farm(farm_name=farm_name, business_name=command.business_name)
            )

            await self.uow.memberships.create(
                Membership(
                    user_id=user_id,
                    farm_id=farm.id,
                    role=MembershipRole.owner,
                    status=MembershipStatus.active,
                )
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    farm_id=farm.id,
                    user_id=user_id,
                    action="farm_created",
                    event_metadata={"farm_name": farm_name},
                )
            )

            await self.uow.commit()

            return Return.ok(
                FarmResponse(
                    id=str(farm.id),
                    farm_name=farm.farm_name,
                    business_name=farm.business_name,
                    status=farm.status.value,
                    role=MembershipRole.owner.value,
                )
            )
