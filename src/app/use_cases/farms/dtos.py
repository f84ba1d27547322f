"""
Farm Use Case DTOs (Data Transfer Objects)

Command and Response classes for farms and their memberships.
"""

from typing import List, Optional

from pydantic import BaseModel


class CreateFarmCommand(BaseModel):
    """Create farm command - the caller becomes its owner"""

    farm_name: str
    business_name: Optional[str] = None


class FarmResponse(BaseModel):
    """Farm information"""

    id: str
    farm_name: str
    business_name: Optional[str]
    status: str
    role: str


class MemberResponse(BaseModel):
    """One membership of a farm"""

    user_id: str
    email: Optional[str]
    role: str
    status: str
    joined_at: str


class MemberListResponse(BaseModel):
    """Response for list members use case"""

    members: List[MemberResponse]


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str
