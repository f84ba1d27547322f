from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.email_claim_repository import IEmailClaimRepository
from src.domain.entities import EmailClaim, RoleFamily


def _normalized(emails: Iterable[str]) -> List[str]:
    return sorted({email.strip().lower() for email in emails if email and email.strip()})


class EmailClaimRepository(IEmailClaimRepository):
    """EmailClaim repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_holders(
        self,
        farm_id: UUID,
        role_family: RoleFamily,
        emails: Iterable[str],
        exclude_party_id: Optional[UUID] = None,
    ) -> List[EmailClaim]:
        """Claims in the farm/family on any of the (lowercased) emails"""
        normalized = _normalized(emails)
        if not normalized:
            return []

        stmt = select(EmailClaim).where(
            EmailClaim.farm_id == farm_id,
            EmailClaim.role_family == role_family,
            col(EmailClaim.email).in_(normalized),
        )
        if exclude_party_id is not None:
            stmt = stmt.where(EmailClaim.party_id != exclude_party_id)

        result = await self.session.exec(stmt)
        return list(result.all())

    async def claim(
        self, party_id: UUID, farm_id: UUID, role_family: RoleFamily, emails: Iterable[str]
    ) -> List[EmailClaim]:
        """Claim the emails the party does not hold yet; a taken email raises IntegrityError on flush"""
        normalized = _normalized(emails)
        if not normalized:
            return []

        held = await self.session.exec(
            select(EmailClaim.email).where(
                EmailClaim.party_id == party_id,
                EmailClaim.farm_id == farm_id,
                EmailClaim.role_family == role_family,
                col(EmailClaim.email).in_(normalized),
            )
        )
        already_claimed = set(held.all())

        claims = [
            EmailClaim(party_id=party_id, farm_id=farm_id, role_family=role_family, email=email)
            for email in normalized
            if email not in already_claimed
        ]
        if not claims:
            return []
        self.session.add_all(claims)
        await self.session.flush()
        return claims

    async def release(self, party_id: UUID, farm_id: UUID, role_family: RoleFamily) -> None:
        """Drop the party's claims in one farm/family"""
        await self.session.execute(
            delete(EmailClaim).where(
                EmailClaim.party_id == party_id,
                EmailClaim.farm_id == farm_id,
                EmailClaim.role_family == role_family,
            )
        )
