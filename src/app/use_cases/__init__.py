"""
Use Cases

Organized into domain folders:
- access/: Identity resolution and the farm access guard
- farms/: Farm creation and memberships
- parties/: Party/Role/Contact store
- orders/: Order validation and writes
- audit/: Audit logs

Import from subdirectories for better organization.
"""

from .access import AccessContext, AuthorizeUseCase, ResolveIdentityUseCase
from .audit import GetAuditEventsUseCase
from .farms import (
    AddMemberUseCase,
    ChangeMemberRoleUseCase,
    CreateFarmUseCase,
    ListMembersUseCase,
    RemoveMemberUseCase,
)
from .orders import (
    CreateOrderUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    UpdateOrderUseCase,
    ValidateOrderUseCase,
)
from .parties import (
    AddContactUseCase,
    AddRoleUseCase,
    CreatePartyUseCase,
    FindPartiesUseCase,
    GetPartyUseCase,
    ListCustomersUseCase,
    RemoveRoleUseCase,
    SetPrimaryContactUseCase,
    UpdatePartyUseCase,
)

__all__ = [
    # Access
    "AccessContext",
    "AuthorizeUseCase",
    "ResolveIdentityUseCase",
    # Farms
    "CreateFarmUseCase",
    "AddMemberUseCase",
    "ChangeMemberRoleUseCase",
    "RemoveMemberUseCase",
    "ListMembersUseCase",
    # Parties
    "CreatePartyUseCase",
    "AddRoleUseCase",
    "AddContactUseCase",
    "SetPrimaryContactUseCase",
    "FindPartiesUseCase",
    "GetPartyUseCase",
    "UpdatePartyUseCase",
    "RemoveRoleUseCase",
    "ListCustomersUseCase",
    # Orders
    "CreateOrderUseCase",
    "UpdateOrderUseCase",
    "ValidateOrderUseCase",
    "GetOrderUseCase",
    "ListOrdersUseCase",
    # Audit
    "GetAuditEventsUseCase",
]
