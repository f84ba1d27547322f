from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from src.domain.entities import EmailClaim, RoleFamily


class IEmailClaimRepository(ABC):
    """EmailClaim repository interface - application layer"""

    @abstractmethod
    async def find_holders(
        self,
        farm_id: UUID,
        role_family: RoleFamily,
        emails: Iterable[str],
        exclude_party_id: Optional[UUID] = None,
    ) -> List[EmailClaim]:
        """Claims in the farm/family on any of the (lowercased) emails"""
        pass

    @abstractmethod
    async def claim(
        self, party_id: UUID, farm_id: UUID, role_family: RoleFamily, emails: Iterable[str]
    ) -> List[EmailClaim]:
        """Claim the emails the party does not hold yet; a taken email raises IntegrityError on flush"""
        pass

    @abstractmethod
    async def release(self, party_id: UUID, farm_id: UUID, role_family: RoleFamily) -> None:
        """Drop the party's claims in one farm/family"""
        pass
