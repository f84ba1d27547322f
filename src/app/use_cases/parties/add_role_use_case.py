"""
Add Role Use Case

Attaches a farm-scoped role to an existing party.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ContactChannel, PartyRole, PartyRoleType, role_family_of
from src.domain.entities.role_metadata import dump_role_metadata

from .common import find_duplicate_actor, integrity_error, parse_metadata, role_response
from .dtos import RoleResponse

logger = logging.getLogger(__name__)


class AddRoleUseCase:
    """
    Use case for giving a party a role in a farm.

    Business Rules:
    - Parties are farm-independent: any existing party may take a role in
      the guarded farm (unknown party: NOT_FOUND)
    - Same role type, or another role of the same family, already held in
      the farm: CONFLICT
    - Duplicate-actor rule as in party creation, against the party's emails
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        farm_id: UUID,
        actor_user_id: UUID,
        party_id: UUID,
        role_type: PartyRoleType,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Result[RoleResponse]:
        parsed = parse_metadata(role_type, metadata)
        if parsed.is_err():
            return parsed

        role_family = role_family_of(role_type)

        async with self.uow:
            party = await self.uow.parties.get_by_id(party_id)
            if party is None:
                return Return.err(Error("NOT_FOUND", "Party not found"))

            existing = await self.uow.party_roles.get_by_party_and_farm(party_id, farm_id)
            if any(role.role_family == role_family for role in existing):
                return Return.err(
                    Error(
                        "CONFLICT",
                        f"Party already holds a {role_family.value} role in this farm",
                    )
                )

            contacts = await self.uow.party_contacts.get_by_party_ids([party_id])
            emails = [c.value for c in contacts if c.channel == ContactChannel.email]
            duplicate = await find_duplicate_actor(
                self.uow, farm_id, [role_family], emails, exclude_party_id=party_id
            )
            if duplicate is not None:
                return Return.err(duplicate)

            try:
                role = await self.uow.party_roles.create(
                    PartyRole(
                        party_id=party_id,
                        farm_id=farm_id,
                        role_type=role_type,
                        role_family=role_family,
                        role_metadata=dump_role_metadata(parsed.value),
                    )
                )
                await self.uow.email_claims.claim(party_id, farm_id, role_family, emails)

                await self.uow.audit_events.create(
                    AuditEvent(
                        farm_id=farm_id,
                        user_id=actor_user_id,
                        action="party_role_added",
                        event_metadata={"party_id": str(party_id), "role_type": role_type.value},
                    )
                )

                await self.uow.commit()
            except IntegrityError as exc:
                await self.uow.rollback()
                logger.warning("Role creation rejected by storage in farm %s: %s", farm_id, exc.orig)
                return Return.err(integrity_error(exc))

            return Return.ok(role_response(role))
