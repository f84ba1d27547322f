"""
User Entity

Represents an authenticated identity that can belong to multiple farms.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - the identity behind a verified credential.

    Business Rules:
    - Email must be unique across all users
    - Disabled users never resolve as an identity
    - Credentials are minted elsewhere; only the id is trusted here
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)

    status: UserStatus = Field(default=UserStatus.active)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
