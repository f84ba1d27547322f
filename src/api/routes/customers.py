"""
Customer API Routes

Flat, read-only customer records derived from parties.
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.utils.access_guard import require_farm_access
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AccessContext
from src.app.use_cases.parties import CustomerListResponse, ListCustomersUseCase
from src.depends import get_unit_of_work
from src.domain.entities import MembershipRole

router = APIRouter(prefix="/farms/{farm_id}/customers", tags=["Customers"])


@router.get("", status_code=status.HTTP_200_OK, response_model=CustomerListResponse)
async def list_customers(
    context: AccessContext = Depends(require_farm_access(MembershipRole.viewer)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """
    List Customers

    One record per party holding a customer role in the farm, with its
    primary contacts and order totals.
    """
    result = await ListCustomersUseCase(uow).execute(context.farm_id, limit=limit, offset=offset)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
