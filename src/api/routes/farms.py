"""
Farm API Routes

Farm creation and membership management.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.access_guard import require_farm_access
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AccessContext
from src.app.use_cases.farms import (
    AddMemberUseCase,
    ChangeMemberRoleUseCase,
    CreateFarmCommand,
    CreateFarmUseCase,
    FarmResponse,
    ListMembersUseCase,
    MemberListResponse,
    MemberResponse,
    RemoveMemberResponse,
    RemoveMemberUseCase,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import MembershipRole

router = APIRouter(prefix="/farms", tags=["Farms"])


class CreateFarmRequest(BaseModel):
    """
    Create farm HTTP request payload

    The caller becomes the owner of the new farm.
    """

    farm_name: str = Field(..., min_length=1, max_length=255)
    business_name: Optional[str] = Field(None, max_length=255)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FarmResponse)
async def create_farm(
    request: CreateFarmRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Farm

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    use_case = CreateFarmUseCase(uow)
    result = await use_case.execute(
        user_id,
        CreateFarmCommand(farm_name=request.farm_name, business_name=request.business_name),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{farm_id}/members", status_code=status.HTTP_200_OK, response_model=MemberListResponse
)
async def list_members(
    context: AccessContext = Depends(require_farm_access(MembershipRole.viewer)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List Members of a farm"""
    result = await ListMembersUseCase(uow).execute(context.farm_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class AddMemberRequest(BaseModel):
    """Add member HTTP request payload"""

    user_id: UUID = Field(..., description="Existing user to add")
    role: str = Field(..., description="Farm role to grant")


@router.post(
    "/{farm_id}/members", status_code=status.HTTP_201_CREATED, response_model=MemberResponse
)
async def add_member(
    request: AddMemberRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.admin)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Member

    Requires admin permissions. A revoked member is re-activated.

    Raises:
        - 403 Forbidden: FORBIDDEN (role above the caller's own)
        - 404 Not Found: USER_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER
        - 422 Unprocessable Entity: VALIDATION_FAILED (unknown role)
    """
    use_case = AddMemberUseCase(uow)
    result = await use_case.execute(
        context.user_id, context.role, context.farm_id, request.user_id, request.role
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangeRoleRequest(BaseModel):
    """Change role HTTP request payload"""

    role: str = Field(..., description="New farm role")


class ChangeRoleResponse(BaseModel):
    """Change role HTTP response payload"""

    status: str
    membership: dict


@router.put(
    "/{farm_id}/members/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=ChangeRoleResponse,
)
async def change_member_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.owner)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Member Role

    Requires owner permissions.

    Raises:
        - 403 Forbidden: FORBIDDEN (non-owner)
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: CANNOT_DEMOTE_SELF
        - 422 Unprocessable Entity: VALIDATION_FAILED (unknown role)
    """
    use_case = ChangeMemberRoleUseCase(uow)
    result = await use_case.execute(context.user_id, context.farm_id, user_id, request.role)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{farm_id}/members/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    user_id: UUID,
    context: AccessContext = Depends(require_farm_access(MembershipRole.admin)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Revokes the membership; the member is denied from the next request on.

    Raises:
        - 403 Forbidden: FORBIDDEN (admin removing an owner)
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: CONFLICT (last owner)
    """
    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(context.user_id, context.role, context.farm_id, user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
