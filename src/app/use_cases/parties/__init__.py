"""
Party Use Cases

The Party/Role/Contact store: one party per real-world actor, farm-scoped
roles, typed contact channels.
"""

from .add_contact_use_case import AddContactUseCase
from .add_role_use_case import AddRoleUseCase
from .create_party_use_case import CreatePartyUseCase
from .dtos import (
    ContactInput,
    ContactResponse,
    CreatePartyCommand,
    CustomerListResponse,
    CustomerView,
    PartyListResponse,
    PartyResponse,
    RoleInput,
    RoleResponse,
    UpdatePartyCommand,
)
from .find_parties_use_case import FindPartiesUseCase
from .get_party_use_case import GetPartyUseCase
from .list_customers_use_case import ListCustomersUseCase
from .remove_role_use_case import RemoveRoleUseCase
from .set_primary_contact_use_case import SetPrimaryContactUseCase
from .update_party_use_case import UpdatePartyUseCase

__all__ = [
    "CreatePartyUseCase",
    "AddRoleUseCase",
    "AddContactUseCase",
    "SetPrimaryContactUseCase",
    "FindPartiesUseCase",
    "GetPartyUseCase",
    "UpdatePartyUseCase",
    "RemoveRoleUseCase",
    "ListCustomersUseCase",
    "CreatePartyCommand",
    "UpdatePartyCommand",
    "RoleInput",
    "ContactInput",
    "PartyResponse",
    "PartyListResponse",
    "RoleResponse",
    "ContactResponse",
    "CustomerView",
    "CustomerListResponse",
]
