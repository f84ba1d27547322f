"""
Farm Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ContactChannel,
    FarmStatus,
    MembershipRole,
    MembershipStatus,
    OrderStatus,
    PartyKind,
    PartyRoleType,
    RoleFamily,
    UserStatus,
    role_family_of,
    role_satisfies,
)

# Export all entities
from .user import User
from .farm import Farm
from .membership import Membership
from .party import Party
from .party_role import PartyRole
from .party_contact import PartyContact
from .email_claim import EmailClaim
from .catalog_item import CatalogItem
from .order import Order
from .order_item import OrderItem
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "ContactChannel",
    "FarmStatus",
    "MembershipRole",
    "MembershipStatus",
    "OrderStatus",
    "PartyKind",
    "PartyRoleType",
    "RoleFamily",
    "UserStatus",
    "role_family_of",
    "role_satisfies",
    # Entities
    "User",
    "Farm",
    "Membership",
    "Party",
    "PartyRole",
    "PartyContact",
    "EmailClaim",
    "CatalogItem",
    "Order",
    "OrderItem",
    "AuditEvent",
]
