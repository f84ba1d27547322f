"""
Change Member Role Use Case

Handles changing a member's role within a farm.
"""

from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, MembershipRole


class ChangeMemberRoleUseCase:
    """
    Use case for changing a member's role within a farm.

    Business Rules:
    - Only an owner can change roles (the route guards with min_role=owner)
    - Owner cannot demote themselves
    - Target user must hold an active membership
    - Role must be one of the farm roles
    - Takes effect on the target's next request; nothing is cached
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, owner_user_id: UUID, farm_id: UUID, target_user_id: UUID, new_role: str
    ) -> Result[Dict[str, Any]]:
        """
        Execute change role use case.

        Args:
            owner_user_id: User ID of the owner making the change
            farm_id: Farm ID
            target_user_id: User ID whose role is being changed
            new_role: New role to assign

        Returns:
            Result with updated membership info, or Error
        """
        async with self.uow:
            try:
                membership_role = MembershipRole(new_role)
            except ValueError:
                return Return.err(
                    Error(
                        "VALIDATION_FAILED",
                        f"Invalid role: {new_role}. Must be one of: "
                        + ", ".join(r.value for r in MembershipRole),
                    )
                )

            target_membership = await self.uow.memberships.get_by_user_and_farm(
                target_user_id, farm_id
            )
            if target_membership is None or not target_membership.is_active:
                return Return.err(
                    Error("MEMBERSHIP_NOT_FOUND", "User is not a member of this farm")
                )

            if owner_user_id == target_user_id and membership_role != MembershipRole.owner:
                return Return.err(
                    Error("CANNOT_DEMOTE_SELF", "Owner cannot demote themselves")
                )

            old_role = target_membership.role.value

            target_membership.role = membership_role
            await self.uow.memberships.update(target_membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    farm_id=farm_id,
                    user_id=owner_user_id,
                    action="role_changed",
                    event_metadata={
                        "target_user_id": str(target_user_id),
                        "old_role": old_role,
                        "new_role": membership_role.value,
                    },
                )
            )

            await self.uow.commit()

            return Return.ok(
                {
                    "status": "updated",
                    "membership": {
                        "user_id": str(target_user_id),
                        "role": membership_role.value,
                    },
                }
            )
