"""
EmailClaim Entity

Storage-level guard of the duplicate-actor rule.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import RoleFamily


class EmailClaim(SQLModel, table=True):
    """
    EmailClaim entity - one email of a party, claimed inside one role family
    of one farm.

    Business Rules:
    - A party holding a role of family F in farm X claims every one of its
      email contacts (lowercased) in (X, F)
    - (farm_id, role_family, email) is unique, so two parties of the same
      family can never share an email inside a farm, even under concurrent
      writers
    """

    __tablename__ = "email_claims"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    farm_id: UUID = Field(foreign_key="farms.id", nullable=False)
    role_family: RoleFamily = Field(nullable=False)
    email: str = Field(max_length=255, nullable=False)
    party_id: UUID = Field(foreign_key="parties.id", nullable=False, index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_email_claims_farm_family_email",
            "farm_id",
            "role_family",
            "email",
            unique=True,
        ),
    )
