"""
Get Party Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .common import load_party_views
from .dtos import PartyResponse


class GetPartyUseCase:
    """A party is only visible to a farm it holds a role in"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, farm_id: UUID, party_id: UUID) -> Result[PartyResponse]:
        async with self.uow:
            party = await self.uow.parties.get_in_farm(party_id, farm_id)
            if party is None:
                return Return.err(Error("NOT_FOUND", "Party not found"))

            views = await load_party_views(self.uow, farm_id, [party])
            return Return.ok(views[0])
