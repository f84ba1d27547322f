"""
Create Party Use Case

Creates a Party together with its initial Roles and Contacts.
"""

import logging
from typing import Dict, List
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    ContactChannel,
    Party,
    PartyContact,
    PartyRole,
    role_family_of,
)
from src.domain.entities.role_metadata import dump_role_metadata

from .common import (
    claim_emails,
    find_duplicate_actor,
    integrity_error,
    is_valid_email,
    load_party_views,
    parse_metadata,
)
from .dtos import CreatePartyCommand, PartyResponse

logger = logging.getLogger(__name__)


class CreatePartyUseCase:
    """
    Use case for creating a party in a farm.

    Business Rules:
    - At least one role; every role is scoped to the guarded farm
    - A party holds at most one role per role family in a farm
    - An email already used by a party of the same role family in the farm
      is a DUPLICATE_ACTOR (also enforced by the email_claims unique index)
    - Per channel at most one contact may be flagged primary; if none is,
      the first contact of that channel becomes primary
    - Party, Roles, Contacts and the AuditEvent commit together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, farm_id: UUID, actor_user_id: UUID, command: CreatePartyCommand
    ) -> Result[PartyResponse]:
        """
        Execute create party use case.

        Args:
            farm_id: Farm resolved by the access guard
            actor_user_id: User performing the creation
            command: Party attributes, roles and contacts

        Returns:
            Result with PartyResponse, or Error(VALIDATION_FAILED |
            DUPLICATE_ACTOR | CONFLICT)
        """
        violations = self._check_payload(command)
        if violations:
            return Return.err(
                Error("VALIDATION_FAILED", "Party payload is invalid", {"violations": violations})
            )

        metadata: List[Dict] = []
        for role_input in command.roles:
            parsed = parse_metadata(role_input.role_type, role_input.metadata)
            if parsed.is_err():
                return parsed
            metadata.append(dump_role_metadata(parsed.value))

        primaries = self._primary_flags(command)
        emails = [c.value for c in command.contacts if c.channel == ContactChannel.email]

        async with self.uow:
            duplicate = await find_duplicate_actor(
                self.uow,
                farm_id,
                [role_family_of(r.role_type) for r in command.roles],
                emails,
            )
            if duplicate is not None:
                return Return.err(duplicate)

            try:
                party = await self.uow.parties.create(
                    Party(
                        display_name=command.display_name.strip(),
                        legal_name=command.legal_name,
                        kind=command.kind,
                    )
                )

                for contact, is_primary in zip(command.contacts, primaries):
                    await self.uow.party_contacts.create(
                        PartyContact(
                            party_id=party.id,
                            channel=contact.channel,
                            label=contact.label,
                            value=contact.value.strip(),
                            is_primary=is_primary,
                        )
                    )

                roles = []
                for role_input, role_metadata in zip(command.roles, metadata):
                    role = await self.uow.party_roles.create(
                        PartyRole(
                            party_id=party.id,
                            farm_id=farm_id,
                            role_type=role_input.role_type,
                            role_family=role_family_of(role_input.role_type),
                            role_metadata=role_metadata,
                        )
                    )
                    roles.append(role)

                # Storage twin of the duplicate-actor check above
                await claim_emails(self.uow, party.id, roles, emails)

                await self.uow.audit_events.create(
                    AuditEvent(
                        farm_id=farm_id,
                        user_id=actor_user_id,
                        action="party_created",
                        event_metadata={
                            "party_id": str(party.id),
                            "role_types": [r.role_type.value for r in command.roles],
                        },
                    )
                )

                await self.uow.commit()
            except IntegrityError as exc:
                await self.uow.rollback()
                logger.warning("Party creation rejected by storage in farm %s: %s", farm_id, exc.orig)
                return Return.err(integrity_error(exc))

            views = await load_party_views(self.uow, farm_id, [party])
            return Return.ok(views[0])

    @staticmethod
    def _check_payload(command: CreatePartyCommand) -> List[Dict]:
        violations = []

        if not command.display_name.strip():
            violations.append(
                {"field": "display_name", "rule": "REQUIRED", "message": "Display name is required"}
            )

        if not command.roles:
            violations.append(
                {"field": "roles", "rule": "REQUIRED", "message": "At least one role is required"}
            )

        families = [role_family_of(r.role_type) for r in command.roles]
        for family in sorted(set(families), key=lambda f: f.value):
            if families.count(family) > 1:
                violations.append(
                    {
                        "field": "roles",
                        "rule": "ONE_ROLE_PER_FAMILY",
                        "message": f"Only one {family.value} role may be held in a farm",
                    }
                )

        for index, contact in enumerate(command.contacts):
            if not contact.value.strip():
                violations.append(
                    {
                        "field": f"contacts[{index}].value",
                        "rule": "REQUIRED",
                        "message": "Contact value is required",
                    }
                )
            elif contact.channel == ContactChannel.email and not is_valid_email(contact.value.strip()):
                violations.append(
                    {
                        "field": f"contacts[{index}].value",
                        "rule": "EMAIL_FORMAT",
                        "message": "Not a valid email address",
                    }
                )

        for channel in ContactChannel:
            flagged = [c for c in command.contacts if c.channel == channel and c.is_primary]
            if len(flagged) > 1:
                violations.append(
                    {
                        "field": "contacts",
                        "rule": "SINGLE_PRIMARY",
                        "message": f"Only one {channel.value} contact may be primary",
                    }
                )

        return violations

    @staticmethod
    def _primary_flags(command: CreatePartyCommand) -> List[bool]:
        """Exactly one primary per channel present in the payload"""
        flagged = {c.channel for c in command.contacts if c.is_primary}
        seen = set()
        flags = []
        for contact in command.contacts:
            if contact.channel in flagged:
                flags.append(contact.is_primary)
            else:
                flags.append(contact.channel not in seen)
            seen.add(contact.channel)
        return flags
