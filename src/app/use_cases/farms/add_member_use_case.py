"""
Add Member Use Case

Grants an existing user a role within a farm.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import (
    AuditEvent,
    Membership,
    MembershipRole,
    MembershipStatus,
    role_satisfies,
)

from .dtos import MemberResponse


class AddMemberUseCase:
    """
    Use case for adding a member to a farm.

    Business Rules:
    - Caller must already hold admin or higher (checked by the access guard)
    - Caller cannot grant a role above their own
    - Target user must exist (USER_NOT_FOUND)
    - Active membership already present: ALREADY_MEMBER
    - A revoked membership row is re-activated with the new role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_user_id: UUID,
        actor_role: MembershipRole,
        farm_id: UUID,
        target_user_id: UUID,
        role: str,
    ) -> Result[MemberResponse]:
        async with self.uow:
            try:
                membership_role = MembershipRole(role)
            except ValueError:
                return Return.err(
                    Error(
                        "VALIDATION_FAILED",
                        f"Invalid role: {role}. Must be one of: "
                        + ", ".join(r.value for r in MembershipRole),
                    )
                )

            if not role_satisfies(actor_role, membership_role):
                return Return.err(
                    Error("FORBIDDEN", "You cannot grant a role above your own")
                )

            user = await self.uow.users.get_by_id(target_user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            membership = await self.uow.memberships.get_by_user_and_farm(
                target_user_id, farm_id
            )
            if membership is not None and membership.is_active:
                return Return.err(
                    Error("ALREADY_MEMBER", "User is already a member of this farm")
                )

            if membership is None:
                membership = await self.uow.memberships.create(
                    Membership(
                        user_id=target_user_id,
                        farm_id=farm_id,
                        role=membership_role,
                        status=MembershipStatus.active,
                    )
                )
            else:
                # The (user, farm) row is unique; reuse it
                membership.role = membership_role
                membership.status = MembershipStatus.active
                membership.joined_at = utcnow()
                membership = await self.uow.memberships.update(membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    farm_id=farm_id,
                    user_id=actor_user_id,
                    action="member_added",
                    event_metadata={
                        "target_user_id": str(target_user_id),
                        "role": membership_role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                MemberResponse(
                    user_id=str(target_user_id),
                    email=user.email,
                    role=membership.role.value,
                    status=membership.status.value,
                    joined_at=membership.joined_at.isoformat() + "Z",
                )
            )
