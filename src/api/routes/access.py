"""
Access API Routes

Guard check: report the caller's access context for a farm.
"""

from fastapi import APIRouter, Depends, status

from src.api.utils.access_guard import require_farm_access
from src.app.use_cases.access import AccessContext

router = APIRouter(tags=["Access"])


@router.get("/access", status_code=status.HTTP_200_OK, response_model=AccessContext)
async def check_access(context: AccessContext = Depends(require_farm_access())):
    """
    Resolve access for the farm named by the X-Farm-ID header.

    Raises:
        - 400 Bad Request: TENANT_REQUIRED, INVALID_FARM_ID
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: FORBIDDEN
        - 503 Service Unavailable: ACCESS_CHECK_TIMEOUT
    """
    return context


@router.get(
    "/farms/{farm_id}/access", status_code=status.HTTP_200_OK, response_model=AccessContext
)
async def farm_access(context: AccessContext = Depends(require_farm_access())):
    """Resolve access for the farm in the path"""
    return context
