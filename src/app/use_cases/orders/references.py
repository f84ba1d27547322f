"""
Loads the farm-scoped candidate rows an order draft refers to.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import RoleFamily
from src.domain.value_objects import OrderDraft, OrderReferences


async def load_order_references(
    uow: UnitOfWork, farm_id: UUID, draft: OrderDraft
) -> OrderReferences:
    """Must run inside an entered unit of work"""
    roles = await uow.party_roles.get_by_parties_in_farm([draft.counterparty_id], farm_id)
    # Orders are sold to customers; other roles do not make a counterparty
    roles = [role for role in roles if role.role_family == RoleFamily.customer]
    catalog_items = await uow.catalog_items.get_by_ids_in_farm(farm_id, draft.catalog_item_ids)

    return OrderReferences(
        counterparties={role.party_id: role.farm_id for role in roles},
        catalog_items={item.id: item.farm_id for item in catalog_items},
    )
