"""
Helpers shared by the party use cases.
"""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from pydantic import ValidationError
from pydantic.networks import validate_email
from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Party, PartyContact, PartyRole, RoleFamily
from src.domain.entities.role_metadata import RoleMetadata, parse_role_metadata

from .dtos import ContactResponse, PartyResponse, RoleResponse

EMAIL_UNAVAILABLE = Error("CONFLICT", "This email cannot be added to the party")


def normalize_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value)
    except ValueError:
        return False
    return True


def parse_metadata(role_type, raw) -> Result[RoleMetadata]:
    try:
        return Return.ok(parse_role_metadata(role_type, raw))
    except ValidationError as exc:
        violations = [
            {
                "field": "metadata." + ".".join(str(part) for part in err["loc"]),
                "rule": err["type"],
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        return Return.err(
            Error(
                "VALIDATION_FAILED",
                f"Invalid metadata for role {role_type.value}",
                {"violations": violations},
            )
        )


async def find_duplicate_actor(
    uow: UnitOfWork,
    farm_id: UUID,
    families: Iterable[RoleFamily],
    emails: Iterable[str],
    exclude_party_id: Optional[UUID] = None,
) -> Optional[Error]:
    """DUPLICATE_ACTOR when another party of the same family in the farm claims an email"""
    emails = [email for email in (normalize_email(e) for e in emails) if email]
    if not emails:
        return None

    for family in sorted(set(families), key=lambda f: f.value):
        holders = await uow.email_claims.find_holders(
            farm_id, family, emails, exclude_party_id=exclude_party_id
        )
        if holders:
            return Error(
                "DUPLICATE_ACTOR",
                f"A {family.value} with this email already exists in this farm",
                {"role_family": family.value, "party_id": str(holders[0].party_id)},
            )
    return None


async def check_new_email(
    uow: UnitOfWork, farm_id: UUID, party_id: UUID, roles: Iterable[PartyRole], email: str
) -> Optional[Error]:
    """
    Duplicate-actor check for an email the party is about to gain.

    Contacts belong to the party, not to a farm, so the email is checked in
    every (farm, family) the party holds a role in. A collision in the
    guarded farm is a DUPLICATE_ACTOR; one elsewhere is a plain CONFLICT that
    names neither the other farm nor its party.
    """
    roles = list(roles)
    local = [role.role_family for role in roles if role.farm_id == farm_id]
    duplicate = await find_duplicate_actor(uow, farm_id, local, [email], exclude_party_id=party_id)
    if duplicate is not None:
        return duplicate

    elsewhere = sorted(
        {(role.farm_id, role.role_family) for role in roles if role.farm_id != farm_id},
        key=lambda pair: (str(pair[0]), pair[1].value),
    )
    for other_farm_id, family in elsewhere:
        holders = await uow.email_claims.find_holders(
            other_farm_id, family, [normalize_email(email)], exclude_party_id=party_id
        )
        if holders:
            return EMAIL_UNAVAILABLE
    return None


async def claim_emails(
    uow: UnitOfWork, party_id: UUID, roles: Iterable[PartyRole], emails: Iterable[str]
) -> None:
    """Claim the emails in every (farm, family) of the given roles"""
    emails = [email for email in (normalize_email(e) for e in emails) if email]
    if not emails:
        return
    for farm_id, family in sorted(
        {(role.farm_id, role.role_family) for role in roles},
        key=lambda pair: (str(pair[0]), pair[1].value),
    ):
        await uow.email_claims.claim(party_id, farm_id, family, emails)


def integrity_error(exc: IntegrityError, other_farms: bool = False) -> Error:
    """
    Map a unique-index violation to the error the caller should see.

    ``other_farms`` marks writes that also claimed emails outside the guarded
    farm; a lost claim race there must not read as a duplicate in this farm.
    """
    message = str(exc.orig)
    if "email_claims" in message:
        if other_farms:
            return EMAIL_UNAVAILABLE
        return Error("DUPLICATE_ACTOR", "A party with this email already exists in this farm")
    return Error("CONFLICT", "The party was changed concurrently, retry with fresh data")


def role_response(role: PartyRole) -> RoleResponse:
    return RoleResponse(
        id=str(role.id),
        role_type=role.role_type.value,
        role_family=role.role_family.value,
        metadata=role.role_metadata or {},
        created_at=role.created_at.isoformat() + "Z",
    )


def contact_response(contact: PartyContact) -> ContactResponse:
    return ContactResponse(
        id=str(contact.id),
        channel=contact.channel.value,
        label=contact.label,
        value=contact.value,
        is_primary=contact.is_primary,
    )


def party_response(
    party: Party, roles: Iterable[PartyRole], contacts: Iterable[PartyContact]
) -> PartyResponse:
    return PartyResponse(
        id=str(party.id),
        display_name=party.display_name,
        legal_name=party.legal_name,
        kind=party.kind.value,
        roles=[role_response(role) for role in roles],
        contacts=[contact_response(contact) for contact in contacts],
    )


async def load_party_views(
    uow: UnitOfWork, farm_id: UUID, parties: List[Party]
) -> List[PartyResponse]:
    """Attach farm-scoped roles and contacts to each party, two queries total"""
    party_ids = [party.id for party in parties]
    roles = await uow.party_roles.get_by_parties_in_farm(party_ids, farm_id)
    contacts = await uow.party_contacts.get_by_party_ids(party_ids)

    roles_by_party: Dict[UUID, List[PartyRole]] = {}
    for role in roles:
        roles_by_party.setdefault(role.party_id, []).append(role)
    contacts_by_party: Dict[UUID, List[PartyContact]] = {}
    for contact in contacts:
        contacts_by_party.setdefault(contact.party_id, []).append(contact)

    return [
        party_response(party, roles_by_party.get(party.id, []), contacts_by_party.get(party.id, []))
        for party in parties
    ]
