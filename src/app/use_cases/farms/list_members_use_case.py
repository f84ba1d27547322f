"""
List Members Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import MemberListResponse, MemberResponse


class ListMembersUseCase:
    """Active and revoked memberships of a farm, oldest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, farm_id: UUID) -> Result[MemberListResponse]:
        async with self.uow:
            memberships = await self.uow.memberships.get_by_farm_id(farm_id)

            members = []
            for membership in memberships:
                user = await self.uow.users.get_by_id(membership.user_id)
                members.append(
                    MemberResponse(
                        user_id=str(membership.user_id),
                        email=user.email if user else None,
                        role=membership.role.value,
                        status=membership.status.value,
                        joined_at=membership.joined_at.isoformat() + "Z",
                    )
                )

            return Return.ok(MemberListResponse(members=members))
