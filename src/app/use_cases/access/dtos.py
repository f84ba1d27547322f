"""
Access Use Case DTOs

The outcome of a successful authorization. Plain values only, so the
context outlives the session it was read from.
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import MembershipRole


class AccessContext(BaseModel):
    """Identity and farm a request is allowed to act on"""

    farm_id: UUID
    user_id: UUID
    role: MembershipRole
    permissions: List[str] = Field(default_factory=list)
