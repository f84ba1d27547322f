"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import raise_for_error
from src.api.utils.access_guard import require_farm_access
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AccessContext
from src.app.use_cases.audit import GetAuditEventsUseCase
from src.depends import get_unit_of_work
from src.domain.entities import MembershipRole

router = APIRouter(prefix="/farms", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    action: str
    user_email: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /farms/{farm_id}/audit-events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/{farm_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    context: AccessContext = Depends(require_farm_access(MembershipRole.admin)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Farm Audit Events

    Only accessible by admin and owner roles.

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Returns:
        - events: List of audit events ordered by newest first
        - next_cursor: Cursor for next page (null if no more events)
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(context.farm_id, limit=limit, cursor=cursor)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
