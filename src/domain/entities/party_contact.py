"""
PartyContact Entity

Typed communication channel belonging to a Party.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import ContactChannel


class PartyContact(SQLModel, table=True):
    """
    PartyContact entity - email, phone or address of a party.

    Business Rules:
    - At most one primary contact per (party_id, channel); the partial
      unique index makes this hold under concurrent writers
    - Address values are stored as a single formatted string
    """

    __tablename__ = "party_contacts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    party_id: UUID = Field(foreign_key="parties.id", nullable=False, index=True)
    channel: ContactChannel = Field(nullable=False)
    label: Optional[str] = Field(default=None, max_length=100)
    value: str = Field(max_length=500)
    is_primary: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "idx_party_contact_primary",
            "party_id",
            "channel",
            unique=True,
            sqlite_where=text("is_primary = 1"),
            postgresql_where=text("is_primary = true"),
        ),
        Index("idx_party_contact_channel_value", "channel", "value"),
    )
