"""
Get Audit Events Use Case

Retrieves the audit log of a farm with cursor pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a farm.

    Business Rules:
    - Caller must be admin or owner (checked by the access guard)
    - Results are farm-scoped, newest first
    - Each event includes action, user_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        farm_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            farm_id: Farm resolved by the access guard
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor
        """
        async with self.uow:
            events, next_cursor = await self.uow.audit_events.get_by_farm_paginated(
                farm_id, limit=limit, cursor=cursor
            )

            emails: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                user_email = None
                if event.user_id:
                    if event.user_id not in emails:
                        user = await self.uow.users.get_by_id(event.user_id)
                        emails[event.user_id] = user.email if user else None
                    user_email = emails[event.user_id]

                events_list.append(
                    {
                        "action": event.action,
                        "user_email": user_email,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
