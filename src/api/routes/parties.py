"""
Party API Routes

Party/Role/Contact store endpoints, all scoped to the guarded farm.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.api.utils.access_guard import require_farm_access
from src.app.repositories.party_repository import PartyFilter
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AccessContext
from src.app.use_cases.parties import (
    AddContactUseCase,
    AddRoleUseCase,
    ContactInput,
    ContactResponse,
    CreatePartyCommand,
    CreatePartyUseCase,
    FindPartiesUseCase,
    GetPartyUseCase,
    PartyListResponse,
    PartyResponse,
    RemoveRoleUseCase,
    RoleInput,
    RoleResponse,
    SetPrimaryContactUseCase,
    UpdatePartyCommand,
    UpdatePartyUseCase,
)
from src.depends import get_unit_of_work
from src.domain.entities import ContactChannel, MembershipRole, PartyKind, PartyRoleType

router = APIRouter(prefix="/farms/{farm_id}/parties", tags=["Parties"])


class CreatePartyRequest(BaseModel):
    """
    Create party HTTP request payload

    Roles are always created in the farm of the URL.
    """

    display_name: str = Field(..., min_length=1, max_length=255)
    legal_name: Optional[str] = Field(None, max_length=255)
    kind: PartyKind
    roles: List[RoleInput] = Field(..., description="At least one role")
    contacts: List[ContactInput] = Field(default_factory=list)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PartyResponse)
async def create_party(
    request: CreatePartyRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.team_member)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Party with its Roles and Contacts in one transaction

    Raises:
        - 409 Conflict: DUPLICATE_ACTOR, CONFLICT
        - 422 Unprocessable Entity: VALIDATION_FAILED
    """
    command = CreatePartyCommand(**request.model_dump())
    result = await CreatePartyUseCase(uow).execute(context.farm_id, context.user_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=PartyListResponse)
async def find_parties(
    context: AccessContext = Depends(require_farm_access(MembershipRole.viewer)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    role_type: Optional[List[PartyRoleType]] = Query(None, description="Role types to match"),
    kind: Optional[PartyKind] = Query(None),
    email: Optional[str] = Query(None, description="Exact email, case-insensitive"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """Find Parties holding any of the role types in the farm"""
    party_filter = PartyFilter(kind=kind, email=email, limit=limit, offset=offset)
    result = await FindPartiesUseCase(uow).execute(context.farm_id, role_type, party_filter)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{party_id}", status_code=status.HTTP_200_OK, response_model=PartyResponse)
async def get_party(
    party_id: UUID,
    context: AccessContext = Depends(require_farm_access(MembershipRole.viewer)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Party

    Raises:
        - 404 Not Found: NOT_FOUND (also for parties of other farms)
    """
    result = await GetPartyUseCase(uow).execute(context.farm_id, party_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdatePartyRequest(BaseModel):
    """Update party HTTP request payload"""

    display_name: Optional[str] = Field(None, max_length=255)
    legal_name: Optional[str] = Field(None, max_length=255)


@router.patch("/{party_id}", status_code=status.HTTP_200_OK, response_model=PartyResponse)
async def update_party(
    party_id: UUID,
    request: UpdatePartyRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.team_member)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Update Party display attributes"""
    command = UpdatePartyCommand(**request.model_dump())
    result = await UpdatePartyUseCase(uow).execute(
        context.farm_id, context.user_id, party_id, command
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class AddRoleRequest(BaseModel):
    """Add role HTTP request payload"""

    role_type: PartyRoleType
    metadata: Optional[Dict[str, Any]] = None


@router.post(
    "/{party_id}/roles", status_code=status.HTTP_201_CREATED, response_model=RoleResponse
)
async def add_role(
    party_id: UUID,
    request: AddRoleRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.team_member)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Role to a party in this farm

    Raises:
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: CONFLICT (family already held), DUPLICATE_ACTOR
        - 422 Unprocessable Entity: VALIDATION_FAILED (metadata)
    """
    result = await AddRoleUseCase(uow).execute(
        context.farm_id, context.user_id, party_id, request.role_type, request.metadata
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{party_id}/roles/{role_type}", status_code=status.HTTP_200_OK)
async def remove_role(
    party_id: UUID,
    role_type: PartyRoleType,
    context: AccessContext = Depends(require_farm_access(MembershipRole.manager)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Role from a party in this farm

    Raises:
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: CONFLICT (orders reference the party)
    """
    result = await RemoveRoleUseCase(uow).execute(
        context.farm_id, context.user_id, party_id, role_type
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/{party_id}/contacts", status_code=status.HTTP_201_CREATED, response_model=ContactResponse
)
async def add_contact(
    party_id: UUID,
    request: ContactInput,
    context: AccessContext = Depends(require_farm_access(MembershipRole.team_member)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add Contact to a party

    Raises:
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: DUPLICATE_ACTOR, CONFLICT
    """
    result = await AddContactUseCase(uow).execute(
        context.farm_id,
        context.user_id,
        party_id,
        request.channel,
        request.value,
        label=request.label,
        is_primary=request.is_primary,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class SetPrimaryContactRequest(BaseModel):
    """Set primary contact HTTP request payload"""

    channel: ContactChannel
    contact_id: UUID


@router.put("/{party_id}/contacts/primary", status_code=status.HTTP_204_NO_CONTENT)
async def set_primary_contact(
    party_id: UUID,
    request: SetPrimaryContactRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.team_member)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set Primary Contact of a channel

    Raises:
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: CONFLICT (concurrent change), DUPLICATE_ACTOR
    """
    result = await SetPrimaryContactUseCase(uow).execute(
        context.farm_id, context.user_id, party_id, request.channel, request.contact_id
    )

    if result.is_err():
        raise_for_error(result.error)
