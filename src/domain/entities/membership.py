"""
Membership Entity

Links User to Farm with a role.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import MembershipRole, MembershipStatus


class Membership(SQLModel, table=True):
    """
    Membership entity - links User to Farm with a role.

    Business Rules:
    - One user can be member of multiple farms
    - (user_id, farm_id) is unique, so at most one active membership exists
    - Revoked memberships authorize nothing
    - Re-adding a revoked member reuses the same row
    """

    __tablename__ = "memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    farm_id: UUID = Field(foreign_key="farms.id", nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    status: MembershipStatus = Field(default=MembershipStatus.active)
    permissions: Optional[list] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_membership_user_farm", "user_id", "farm_id", unique=True),
        Index("idx_membership_status", "status"),
    )

    @property
    def is_active(self) -> bool:
        return self.status == MembershipStatus.active
