"""
Identity resolution shared by the access use cases.
"""

from typing import Any, Callable, Dict, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserStatus

# Returns the decoded claims, or None when the credential does not verify
CredentialVerifier = Callable[[str], Optional[Dict[str, Any]]]

UNAUTHENTICATED = Error("UNAUTHENTICATED", "Authentication required")


def subject_of(claims: Dict[str, Any]) -> Optional[UUID]:
    raw = claims.get("sub") or claims.get("user_id")
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        return None


async def resolve_identity(
    uow: UnitOfWork, verify_credential: CredentialVerifier, credential: Optional[str]
) -> Result[UUID]:
    """
    Map a bearer credential to an active user id.

    Must run inside an entered unit of work. Every failure is the same
    UNAUTHENTICATED error.
    """
    if not credential:
        return Return.err(UNAUTHENTICATED)

    claims = verify_credential(credential)
    if claims is None:
        return Return.err(UNAUTHENTICATED)

    user_id = subject_of(claims)
    if user_id is None:
        return Return.err(UNAUTHENTICATED)

    user = await uow.users.get_by_id(user_id)
    if user is None or user.status != UserStatus.active:
        return Return.err(UNAUTHENTICATED)

    return Return.ok(user.id)


class ResolveIdentityUseCase:
    """Identity-only check for operations that are not farm scoped (farm creation)"""

    def __init__(self, uow: UnitOfWork, verify_credential: CredentialVerifier):
        self.uow = uow
        self.verify_credential = verify_credential

    async def execute(self, credential: Optional[str]) -> Result[UUID]:
        async with self.uow:
            return await resolve_identity(self.uow, self.verify_credential, credential)
