"""
Authorize Use Case

Decides whether a verified identity may act on a farm.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import FarmStatus, MembershipRole, role_satisfies

from .dtos import AccessContext
from .identity import CredentialVerifier, resolve_identity

logger = logging.getLogger(__name__)

# One message for every denial so callers cannot tell which farms exist
FORBIDDEN = Error("FORBIDDEN", "You do not have access to this farm")


class AuthorizeUseCase:
    """
    Use case guarding every farm-scoped operation.

    Business Rules:
    - Missing, invalid or expired credential, or an unknown/disabled user:
      UNAUTHENTICATED
    - No farm selector: TENANT_REQUIRED; malformed selector: INVALID_FARM_ID
    - No membership, revoked membership, unknown farm or suspended farm:
      FORBIDDEN, indistinguishable from each other
    - Role below min_role: FORBIDDEN
    - Membership is read fresh on every call; revocation is effective
      on the next request
    """

    def __init__(self, uow: UnitOfWork, verify_credential: CredentialVerifier):
        self.uow = uow
        self.verify_credential = verify_credential

    async def execute(
        self,
        credential: Optional[str],
        farm_selector: Optional[str],
        min_role: Optional[MembershipRole] = None,
    ) -> Result[AccessContext]:
        """
        Execute authorize use case.

        Args:
            credential: Raw bearer token, None when absent
            farm_selector: Farm id as supplied by the caller (path or header)
            min_role: Lowest farm role allowed to proceed, None for any member

        Returns:
            Result with AccessContext, or Error
        """
        async with self.uow:
            identity = await resolve_identity(self.uow, self.verify_credential, credential)
            if identity.is_err():
                return identity
            user_id = identity.value

            if farm_selector is None or not farm_selector.strip():
                return Return.err(Error("TENANT_REQUIRED", "A farm must be selected"))

            try:
                farm_id = UUID(farm_selector.strip())
            except ValueError:
                return Return.err(Error("INVALID_FARM_ID", "Invalid farm ID format"))

            membership = await self.uow.memberships.get_by_user_and_farm(user_id, farm_id)
            if membership is None or not membership.is_active:
                logger.info("Access denied: user %s has no active membership", user_id)
                return Return.err(FORBIDDEN)

            farm = await self.uow.farms.get_by_id(farm_id)
            if farm is None or farm.status != FarmStatus.active:
                logger.info("Access denied: farm %s unavailable for user %s", farm_id, user_id)
                return Return.err(FORBIDDEN)

            if min_role is not None and not role_satisfies(membership.role, min_role):
                logger.info(
                    "Access denied: user %s is %s, %s required",
                    user_id,
                    membership.role.value,
                    MembershipRole(min_role).value,
                )
                return Return.err(FORBIDDEN)

            return Return.ok(
                AccessContext(
                    farm_id=farm_id,
                    user_id=user_id,
                    role=membership.role,
                    permissions=list(membership.permissions or []),
                )
            )
