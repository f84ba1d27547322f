"""
Order Value Objects

Immutable inputs of the integrity validator and the order writer.
Nothing here touches storage.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Tuple
from uuid import UUID

from .entities.enums import OrderStatus


@dataclass(frozen=True)
class OrderLineDraft:
    product_name: str
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal
    unit: str = "unit"
    catalog_item_id: Optional[UUID] = None


@dataclass(frozen=True)
class OrderDraft:
    counterparty_id: UUID
    order_date: date
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal
    items: Tuple[OrderLineDraft, ...] = ()
    requested_delivery_date: Optional[date] = None
    actual_delivery_date: Optional[date] = None
    order_number: Optional[str] = None
    status: OrderStatus = OrderStatus.pending
    notes: Optional[str] = None

    @property
    def catalog_item_ids(self) -> frozenset:
        return frozenset(
            item.catalog_item_id for item in self.items if item.catalog_item_id is not None
        )


@dataclass(frozen=True)
class OrderReferences:
    """
    Candidate rows for the ids an order references, keyed by id with the
    owning farm as value. Callers load these already scoped to a farm;
    the validator still compares farm ids.
    """

    counterparties: Mapping[UUID, UUID] = field(default_factory=dict)
    catalog_items: Mapping[UUID, UUID] = field(default_factory=dict)
