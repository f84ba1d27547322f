"""
Find Parties Use Case

Parties holding given role types in a farm.
"""

from typing import Optional, Sequence
from uuid import UUID

from libs.result import Result, Return
from src.app.repositories.party_repository import PartyFilter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PartyRoleType

from .common import load_party_views
from .dtos import PartyListResponse


class FindPartiesUseCase:
    """
    Business Rules:
    - The farm filter is applied in SQL, never after fetching
    - Attached roles are those of the requested farm only
    - No role types means every role type
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        farm_id: UUID,
        role_types: Optional[Sequence[PartyRoleType]] = None,
        party_filter: Optional[PartyFilter] = None,
    ) -> Result[PartyListResponse]:
        async with self.uow:
            parties = await self.uow.parties.find_by_farm_and_role_types(
                farm_id, list(role_types or PartyRoleType), party_filter or PartyFilter()
            )
            views = await load_party_views(self.uow, farm_id, parties)
            return Return.ok(PartyListResponse(parties=views))
