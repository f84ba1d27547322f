"""
Farm access guard as a FastAPI dependency.

Every farm-scoped route depends on ``require_farm_access(min_role)`` and
takes the farm id from the returned AccessContext, never from the request.
"""

import asyncio
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials

from config import ApplicationConfig
from libs.result import Error
from src.api.error import raise_for_error
from src.api.utils.jwt import verify_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AccessContext, AuthorizeUseCase
from src.depends import bearer_token, get_unit_of_work, security
from src.domain.entities import MembershipRole

logger = logging.getLogger(__name__)

FARM_HEADER = "X-Farm-ID"


def extract_farm_selector(request: Request) -> Optional[str]:
    """Path parameter farm_id first, then the X-Farm-ID header"""
    selector = request.path_params.get("farm_id")
    if selector:
        return selector
    return request.headers.get(FARM_HEADER)


def require_farm_access(min_role: Optional[MembershipRole] = MembershipRole.viewer):
    async def guard(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> AccessContext:
        use_case = AuthorizeUseCase(uow, verify_jwt)
        try:
            result = await asyncio.wait_for(
                use_case.execute(
                    bearer_token(credentials), extract_farm_selector(request), min_role
                ),
                timeout=ApplicationConfig.ACCESS_GUARD_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError:
            logger.warning("Access check timed out for %s %s", request.method, request.url.path)
            raise_for_error(
                Error("ACCESS_CHECK_TIMEOUT", "Access check timed out, please retry")
            )

        if result.is_err():
            raise_for_error(result.error)
        return result.value

    return guard
