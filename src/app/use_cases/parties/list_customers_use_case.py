"""
List Customers Use Case

Flat customer records derived from the party model, for callers that
still expect one row per customer.
"""

from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.repositories.party_repository import PartyFilter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ContactChannel, PartyContact, PartyRole, PartyRoleType

from .dtos import CustomerListResponse, CustomerView

CUSTOMER_ROLE_TYPES = (PartyRoleType.customer_business, PartyRoleType.customer_individual)


class ListCustomersUseCase:
    """Read-only view; nothing is ever written through it"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, farm_id: UUID, limit: int = 50, offset: int = 0
    ) -> Result[CustomerListResponse]:
        async with self.uow:
            parties = await self.uow.parties.find_by_farm_and_role_types(
                farm_id, CUSTOMER_ROLE_TYPES, PartyFilter(limit=limit, offset=offset)
            )
            party_ids = [party.id for party in parties]
            roles = await self.uow.party_roles.get_by_parties_in_farm(party_ids, farm_id)
            contacts = await self.uow.party_contacts.get_by_party_ids(party_ids)
            summaries = await self.uow.orders.summarize_by_counterparties(farm_id, party_ids)

            customer_roles: Dict[UUID, PartyRole] = {
                role.party_id: role for role in roles if role.role_type in CUSTOMER_ROLE_TYPES
            }
            primaries: Dict[UUID, Dict[ContactChannel, str]] = {}
            for contact in contacts:
                if contact.is_primary:
                    primaries.setdefault(contact.party_id, {})[contact.channel] = contact.value

            customers: List[CustomerView] = []
            for party in parties:
                role = customer_roles[party.id]
                metadata = role.role_metadata or {}
                party_contacts = primaries.get(party.id, {})
                summary = summaries.get(party.id)
                is_business = role.role_type == PartyRoleType.customer_business

                customers.append(
                    CustomerView(
                        id=str(party.id),
                        name=party.display_name,
                        email=party_contacts.get(ContactChannel.email),
                        phone=party_contacts.get(ContactChannel.phone),
                        address=party_contacts.get(ContactChannel.address),
                        business_name=(party.legal_name or party.display_name) if is_business else None,
                        type="B2B" if is_business else "B2C",
                        payment_terms=metadata.get("payment_terms"),
                        credit_limit=_as_text(metadata.get("credit_limit")),
                        status=metadata.get("status"),
                        total_orders=summary.order_count if summary else 0,
                        total_revenue=str(summary.revenue if summary else Decimal("0")),
                        last_order_date=(
                            summary.last_order_date.isoformat()
                            if summary and summary.last_order_date
                            else None
                        ),
                    )
                )

            return Return.ok(CustomerListResponse(customers=customers))


def _as_text(value) -> Optional[str]:
    return None if value is None else str(value)
