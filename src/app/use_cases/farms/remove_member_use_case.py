"""
Remove Member Use Case

Revokes a membership. The row is kept so the member can be re-added.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, MembershipRole, MembershipStatus

from .dtos import RemoveMemberResponse


class RemoveMemberUseCase:
    """
    Use case for removing members from a farm.

    Business Rules:
    - Caller holds admin or higher (checked by the access guard)
    - Only an owner can remove an owner
    - The last active owner cannot be removed
    - Soft delete: status=revoked, denied from the next request on
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        requester_user_id: UUID,
        requester_role: MembershipRole,
        farm_id: UUID,
        target_user_id: UUID,
    ) -> Result[RemoveMemberResponse]:
        async with self.uow:
            target_membership = await self.uow.memberships.get_by_user_and_farm(
                target_user_id, farm_id
            )
            if target_membership is None or not target_membership.is_active:
                return Return.err(
                    Error("MEMBERSHIP_NOT_FOUND", "Target user is not a member of this farm")
                )

            if (
                target_membership.role == MembershipRole.owner
                and requester_role != MembershipRole.owner
            ):
                return Return.err(Error("FORBIDDEN", "Only owners can remove owners"))

            if target_membership.role == MembershipRole.owner:
                all_memberships = await self.uow.memberships.get_by_farm_id(farm_id)
                owner_count = sum(
                    1
                    for m in all_memberships
                    if m.role == MembershipRole.owner and m.status == MembershipStatus.active
                )
                if owner_count <= 1:
                    return Return.err(
                        Error("CONFLICT", "Cannot remove the last owner of a farm")
                    )

            target_membership.status = MembershipStatus.revoked
            await self.uow.memberships.update(target_membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    farm_id=farm_id,
                    user_id=requester_user_id,
                    action="member_removed",
                    event_metadata={
                        "removed_user_id": str(target_user_id),
                        "removed_user_role": target_membership.role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(RemoveMemberResponse(status="removed"))
