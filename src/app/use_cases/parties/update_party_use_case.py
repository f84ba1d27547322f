"""
Update Party Use Case

Changes display attributes of a party visible to the farm.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

from .common import load_party_views
from .dtos import PartyResponse, UpdatePartyCommand


class UpdatePartyUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, farm_id: UUID, actor_user_id: UUID, party_id: UUID, command: UpdatePartyCommand
    ) -> Result[PartyResponse]:
        if command.display_name is not None and not command.display_name.strip():
            return Return.err(
                Error(
                    "VALIDATION_FAILED",
                    "Display name cannot be empty",
                    {
                        "violations": [
                            {
                                "field": "display_name",
                                "rule": "REQUIRED",
                                "message": "Display name cannot be empty",
                            }
                        ]
                    },
                )
            )

        async with self.uow:
            party = await self.uow.parties.get_in_farm(party_id, farm_id)
            if party is None:
                return Return.err(Error("NOT_FOUND", "Party not found"))

            changed = {}
            if command.display_name is not None:
                party.display_name = command.display_name.strip()
                changed["display_name"] = party.display_name
            if command.legal_name is not None:
                party.legal_name = command.legal_name or None
                changed["legal_name"] = party.legal_name

            if changed:
                party = await self.uow.parties.update(party)
                await self.uow.audit_events.create(
                    AuditEvent(
                        farm_id=farm_id,
                        user_id=actor_user_id,
                        action="party_updated",
                        event_metadata={"party_id": str(party_id), "changes": changed},
                    )
                )
                await self.uow.commit()

            views = await load_party_views(self.uow, farm_id, [party])
            return Return.ok(views[0])
