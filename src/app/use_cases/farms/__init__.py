"""
Farm Management Use Cases

Farm creation and membership administration.
"""

from .add_member_use_case import AddMemberUseCase
from .change_member_role_use_case import ChangeMemberRoleUseCase
from .create_farm_use_case import CreateFarmUseCase
from .dtos import (
    CreateFarmCommand,
    FarmResponse,
    MemberListResponse,
    MemberResponse,
    RemoveMemberResponse,
)
from .list_members_use_case import ListMembersUseCase
from .remove_member_use_case import RemoveMemberUseCase

__all__ = [
    "CreateFarmUseCase",
    "AddMemberUseCase",
    "ChangeMemberRoleUseCase",
    "RemoveMemberUseCase",
    "ListMembersUseCase",
    "CreateFarmCommand",
    "FarmResponse",
    "MemberResponse",
    "MemberListResponse",
    "RemoveMemberResponse",
]
