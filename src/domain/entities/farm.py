"""
Farm Entity

The tenant: every domain row carries a mandatory farm_id.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import FarmStatus


class Farm(SQLModel, table=True):
    """
    Farm entity - isolated tenant account.

    Business Rules:
    - Each farm has isolated data
    - Suspension blocks all operations for every member
    """

    __tablename__ = "farms"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    farm_name: str = Field(max_length=255)
    business_name: Optional[str] = Field(default=None, max_length=255)

    status: FarmStatus = Field(default=FarmStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_farm_status", "status"),)
