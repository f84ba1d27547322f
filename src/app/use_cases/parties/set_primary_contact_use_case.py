"""
Set Primary Contact Use Case

Makes one contact the primary of its channel for a party.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ContactChannel

from .common import integrity_error

logger = logging.getLogger(__name__)

NOT_FOUND = Error("NOT_FOUND", "Contact not found")


class SetPrimaryContactUseCase:
    """
    Use case for switching the primary contact of a channel.

    Business Rules:
    - Other primaries of (party, channel) are cleared before the target is
      set, in the same transaction
    - Contact not on the party, wrong channel, or party without a role in
      the farm: NOT_FOUND
    - Losing a race against another writer surfaces as CONFLICT through
      the partial unique index
    - Email claims cover every email of the party, so switching the primary
      never changes what the party claims in any farm
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        farm_id: UUID,
        actor_user_id: UUID,
        party_id: UUID,
        channel: ContactChannel,
        contact_id: UUID,
    ) -> Result[None]:
        async with self.uow:
            roles = await self.uow.party_roles.get_by_party_and_farm(party_id, farm_id)
            if not roles:
                return Return.err(NOT_FOUND)

            contact = await self.uow.party_contacts.get_by_id(contact_id)
            if contact is None or contact.party_id != party_id or contact.channel != channel:
                return Return.err(NOT_FOUND)

            if contact.is_primary:
                return Return.ok(None)

            try:
                await self.uow.party_contacts.mark_primary(party_id, channel, contact_id)

                await self.uow.audit_events.create(
                    AuditEvent(
                        farm_id=farm_id,
                        user_id=actor_user_id,
                        action="primary_contact_changed",
                        event_metadata={
                            "party_id": str(party_id),
                            "channel": channel.value,
                            "contact_id": str(contact_id),
                        },
                    )
                )

                await self.uow.commit()
            except IntegrityError as exc:
                await self.uow.rollback()
                logger.warning("Primary contact change rejected for party %s: %s", party_id, exc.orig)
                return Return.err(integrity_error(exc))

            return Return.ok(None)
