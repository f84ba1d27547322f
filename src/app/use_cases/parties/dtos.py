"""
Party Use Case DTOs (Data Transfer Objects)

Command and Response classes for the Party/Role/Contact store.
Role metadata arrives as a plain mapping and is validated against the
typed model of the role's family inside the use case.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities import ContactChannel, PartyKind, PartyRoleType


# ============================================================================
# Command DTOs
# ============================================================================


class RoleInput(BaseModel):
    """A role to attach, scoped to the guarded farm"""

    role_type: PartyRoleType
    metadata: Optional[Dict[str, Any]] = None


class ContactInput(BaseModel):
    """A contact channel of a party"""

    channel: ContactChannel
    value: str
    label: Optional[str] = None
    is_primary: bool = False


class CreatePartyCommand(BaseModel):
    """Create party command - Party, Roles and Contacts in one unit"""

    display_name: str
    legal_name: Optional[str] = None
    kind: PartyKind
    roles: List[RoleInput] = Field(default_factory=list)
    contacts: List[ContactInput] = Field(default_factory=list)


class UpdatePartyCommand(BaseModel):
    """Display attributes only; unset fields are left alone"""

    display_name: Optional[str] = None
    legal_name: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class ContactResponse(BaseModel):
    id: str
    channel: str
    label: Optional[str]
    value: str
    is_primary: bool


class RoleResponse(BaseModel):
    id: str
    role_type: str
    role_family: str
    metadata: Dict[str, Any]
    created_at: str


class PartyResponse(BaseModel):
    """A party with the roles it holds in one farm and its contacts"""

    id: str
    display_name: str
    legal_name: Optional[str]
    kind: str
    roles: List[RoleResponse]
    contacts: List[ContactResponse]


class PartyListResponse(BaseModel):
    parties: List[PartyResponse]


class CustomerView(BaseModel):
    """
    Flat customer record derived from Party + customer Role + primary
    Contacts. Read-only.
    """

    id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    business_name: Optional[str]
    type: str  # B2B | B2C
    payment_terms: Optional[str]
    credit_limit: Optional[str]
    status: Optional[str]
    total_orders: int
    total_revenue: str
    last_order_date: Optional[str]


class CustomerListResponse(BaseModel):
    customers: List[CustomerView]
