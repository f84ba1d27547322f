"""
Farm Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    disabled = "disabled"


class FarmStatus(str, Enum):
    """Farm (tenant) status"""

    active = "active"
    suspended = "suspended"


class MembershipRole(str, Enum):
    """User role within a farm"""

    owner = "owner"
    admin = "admin"
    manager = "manager"
    team_lead = "team_lead"
    team_member = "team_member"
    viewer = "viewer"


class MembershipStatus(str, Enum):
    """Membership status"""

    active = "active"
    revoked = "revoked"


# Higher level means more authority within a farm
ROLE_HIERARCHY = {
    MembershipRole.owner: 6,
    MembershipRole.admin: 5,
    MembershipRole.manager: 4,
    MembershipRole.team_lead: 3,
    MembershipRole.team_member: 2,
    MembershipRole.viewer: 1,
}


def role_satisfies(actual: MembershipRole, required: MembershipRole) -> bool:
    """True when ``actual`` is at least as privileged as ``required``."""
    return ROLE_HIERARCHY[MembershipRole(actual)] >= ROLE_HIERARCHY[MembershipRole(required)]


class PartyKind(str, Enum):
    """Real-world actor classification"""

    organization = "organization"
    individual = "individual"


class PartyRoleType(str, Enum):
    """Capacity a party holds within one farm"""

    customer_business = "customer_business"
    customer_individual = "customer_individual"
    supplier = "supplier"
    distributor = "distributor"
    employee = "employee"


class RoleFamily(str, Enum):
    """Role types in the same family conflict on a shared email"""

    customer = "customer"
    supplier = "supplier"
    employee = "employee"


ROLE_FAMILIES = {
    PartyRoleType.customer_business: RoleFamily.customer,
    PartyRoleType.customer_individual: RoleFamily.customer,
    PartyRoleType.supplier: RoleFamily.supplier,
    PartyRoleType.distributor: RoleFamily.supplier,
    PartyRoleType.employee: RoleFamily.employee,
}


def role_family_of(role_type: PartyRoleType) -> RoleFamily:
    return ROLE_FAMILIES[PartyRoleType(role_type)]


class ContactChannel(str, Enum):
    """Contact channel type"""

    email = "email"
    phone = "phone"
    address = "address"


class OrderStatus(str, Enum):
    """Order lifecycle status"""

    pending = "pending"
    confirmed = "confirmed"
    fulfilled = "fulfilled"
    delivered = "delivered"
    cancelled = "cancelled"
