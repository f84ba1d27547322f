"""
Party Entity

One row per real-world actor, independent of any farm.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import PartyKind


class Party(SQLModel, table=True):
    """
    Party entity - a person or organization.

    Business Rules:
    - Created once, display attributes may be updated
    - Never hard-deleted while any PartyRole references it
    - Farm-specific data lives on PartyRole, never here
    """

    __tablename__ = "parties"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    display_name: str = Field(max_length=255)
    legal_name: Optional[str] = Field(default=None, max_length=255)
    kind: PartyKind = Field(nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_party_display_name", "display_name"),)
