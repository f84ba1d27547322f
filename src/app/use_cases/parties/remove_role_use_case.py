"""
Remove Role Use Case

Detaches a role from a party. The party itself is never deleted.
"""

from typing import Any, Dict
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PartyRoleType


class RemoveRoleUseCase:
    """
    Business Rules:
    - Role must exist for (party, farm, role_type) (else NOT_FOUND)
    - Blocked with CONFLICT while any order of the farm references the party
    - The party's email claims in the role's family are released
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, farm_id: UUID, actor_user_id: UUID, party_id: UUID, role_type: PartyRoleType
    ) -> Result[Dict[str, Any]]:
        async with self.uow:
            # Same row lock the order writer takes on the counterparty, so a
            # concurrent order write and this delete serialize
            roles = await self.uow.party_roles.get_by_party_and_farm(
                party_id, farm_id, for_update=True
            )
            role = next((r for r in roles if r.role_type == role_type), None)
            if role is None:
                return Return.err(Error("NOT_FOUND", "Role not found"))

            order_count = await self.uow.orders.count_by_counterparty(farm_id, party_id)
            if order_count > 0:
                return Return.err(
                    Error(
                        "CONFLICT",
                        f"Party is referenced by {order_count} order(s) in this farm",
                        {"order_count": order_count},
                    )
                )

            await self.uow.party_roles.delete(role)
            await self.uow.email_claims.release(party_id, farm_id, role.role_family)

            await self.uow.audit_events.create(
                AuditEvent(
                    farm_id=farm_id,
                    user_id=actor_user_id,
                    action="party_role_removed",
                    event_metadata={"party_id": str(party_id), "role_type": role_type.value},
                )
            )

            await self.uow.commit()

            return Return.ok({"status": "removed"})
