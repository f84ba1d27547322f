"""
Add Contact Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ContactChannel, PartyContact

from .common import check_new_email, claim_emails, contact_response, integrity_error, is_valid_email
from .dtos import ContactResponse

logger = logging.getLogger(__name__)


class AddContactUseCase:
    """
    Use case for adding a contact channel to a party.

    Business Rules:
    - Party must hold a role in the farm (else NOT_FOUND)
    - The first contact of a channel is always primary
    - A new primary demotes the previous one atomically
    - A new email is claimed in every (farm, family) the party holds a role
      in. A clash in the guarded farm is a DUPLICATE_ACTOR, a clash in
      another farm a CONFLICT that does not name that farm
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        farm_id: UUID,
        actor_user_id: UUID,
        party_id: UUID,
        channel: ContactChannel,
        value: str,
        label: Optional[str] = None,
        is_primary: bool = False,
    ) -> Result[ContactResponse]:
        value = value.strip()
        violation = None
        if not value:
            violation = {"field": "value", "rule": "REQUIRED", "message": "Contact value is required"}
        elif channel == ContactChannel.email and not is_valid_email(value):
            violation = {"field": "value", "rule": "EMAIL_FORMAT", "message": "Not a valid email address"}
        if violation is not None:
            return Return.err(
                Error("VALIDATION_FAILED", violation["message"], {"violations": [violation]})
            )

        async with self.uow:
            roles = await self.uow.party_roles.get_by_party(party_id)
            if not any(role.farm_id == farm_id for role in roles):
                return Return.err(Error("NOT_FOUND", "Party not found"))

            if channel == ContactChannel.email:
                duplicate = await check_new_email(self.uow, farm_id, party_id, roles, value)
                if duplicate is not None:
                    return Return.err(duplicate)

            current_primary = await self.uow.party_contacts.get_primary(party_id, channel)
            make_primary = is_primary or current_primary is None

            try:
                # Inserted as non-primary first; mark_primary demotes before promoting
                contact = await self.uow.party_contacts.create(
                    PartyContact(
                        party_id=party_id,
                        channel=channel,
                        label=label,
                        value=value,
                        is_primary=False,
                    )
                )

                if channel == ContactChannel.email:
                    await claim_emails(self.uow, party_id, roles, [value])

                if make_primary:
                    await self.uow.party_contacts.mark_primary(party_id, channel, contact.id)
                    contact.is_primary = True

                await self.uow.audit_events.create(
                    AuditEvent(
                        farm_id=farm_id,
                        user_id=actor_user_id,
                        action="contact_added",
                        event_metadata={
                            "party_id": str(party_id),
                            "channel": channel.value,
                            "is_primary": make_primary,
                        },
                    )
                )

                await self.uow.commit()
            except IntegrityError as exc:
                await self.uow.rollback()
                logger.warning("Contact creation rejected for party %s: %s", party_id, exc.orig)
                other_farms = any(role.farm_id != farm_id for role in roles)
                return Return.err(integrity_error(exc, other_farms=other_farms))

            return Return.ok(contact_response(contact))
