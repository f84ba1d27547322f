"""
Role Metadata

Typed metadata per role family. The JSON column on PartyRole only ever
holds ``model_dump(mode="json")`` of one of these models.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import PartyRoleType, RoleFamily, role_family_of


class PaymentTerms(str, Enum):
    prepaid = "prepaid"
    cod = "cod"
    net_15 = "net_15"
    net_30 = "net_30"
    net_60 = "net_60"


class CustomerMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: str = "active"
    payment_terms: PaymentTerms = PaymentTerms.net_30
    credit_limit: Decimal = Field(default=Decimal("0"), ge=0)
    order_frequency: Optional[str] = None
    preferred_categories: List[str] = Field(default_factory=list)


class SupplierMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    payment_terms: PaymentTerms = PaymentTerms.net_30
    lead_time_days: int = Field(default=0, ge=0)
    quality_rating: Optional[float] = Field(default=None, ge=0, le=5)
    delivery_rating: Optional[float] = Field(default=None, ge=0, le=5)
    categories: List[str] = Field(default_factory=list)


class EmployeeMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    department: Optional[str] = None
    position: Optional[str] = None
    employee_code: Optional[str] = None


RoleMetadata = Union[CustomerMetadata, SupplierMetadata, EmployeeMetadata]

METADATA_MODELS: Dict[RoleFamily, Type[BaseModel]] = {
    RoleFamily.customer: CustomerMetadata,
    RoleFamily.supplier: SupplierMetadata,
    RoleFamily.employee: EmployeeMetadata,
}


def metadata_model_for(role_type: PartyRoleType) -> Type[BaseModel]:
    return METADATA_MODELS[role_family_of(role_type)]


def parse_role_metadata(role_type: PartyRoleType, raw: Optional[Dict[str, Any]]) -> RoleMetadata:
    """Build the typed metadata for ``role_type``; raises pydantic.ValidationError."""
    return metadata_model_for(role_type).model_validate(raw or {})


def dump_role_metadata(metadata: RoleMetadata) -> Dict[str, Any]:
    return metadata.model_dump(mode="json")
