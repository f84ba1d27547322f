"""
PartyRole Entity

A farm-scoped capacity (customer, supplier, ...) held by a Party.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import PartyRoleType, RoleFamily


class PartyRole(SQLModel, table=True):
    """
    PartyRole entity - one party acting in one farm with one role type.

    Business Rules:
    - (party_id, farm_id, role_type) is unique
    - role_metadata only has meaning inside farm_id
    - While the role exists the party's emails are claimed in
      (farm_id, role_family), see EmailClaim
    """

    __tablename__ = "party_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    party_id: UUID = Field(foreign_key="parties.id", nullable=False, index=True)
    farm_id: UUID = Field(foreign_key="farms.id", nullable=False, index=True)

    role_type: PartyRoleType = Field(nullable=False)
    role_family: RoleFamily = Field(nullable=False)

    # Serialized form of the typed metadata model for role_type
    role_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_party_role_unique", "party_id", "farm_id", "role_type", unique=True),
        Index("idx_party_role_farm_type", "farm_id", "role_type"),
    )
