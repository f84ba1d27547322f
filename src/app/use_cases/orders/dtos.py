"""
Order Use Case DTOs (Data Transfer Objects)
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.domain.entities import Order, OrderItem


class OrderItemResponse(BaseModel):
    id: str
    catalog_item_id: Optional[str]
    product_name: str
    unit: str
    quantity: str
    unit_price: str
    total_price: str


class OrderResponse(BaseModel):
    id: str
    farm_id: str
    order_number: str
    counterparty_id: str
    order_date: str
    requested_delivery_date: Optional[str]
    actual_delivery_date: Optional[str]
    status: str
    subtotal: str
    tax: str
    shipping_cost: str
    total: str
    notes: Optional[str]
    items: List[OrderItemResponse]

    @classmethod
    def from_entities(cls, order: Order, items: List[OrderItem]) -> "OrderResponse":
        return cls(
            id=str(order.id),
            farm_id=str(order.farm_id),
            order_number=order.order_number,
            counterparty_id=str(order.counterparty_id),
            order_date=order.order_date.isoformat(),
            requested_delivery_date=_iso(order.requested_delivery_date),
            actual_delivery_date=_iso(order.actual_delivery_date),
            status=order.status.value,
            subtotal=str(order.subtotal),
            tax=str(order.tax),
            shipping_cost=str(order.shipping_cost),
            total=str(order.total),
            notes=order.notes,
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    catalog_item_id=str(item.catalog_item_id) if item.catalog_item_id else None,
                    product_name=item.product_name,
                    unit=item.unit,
                    quantity=str(item.quantity),
                    unit_price=str(item.unit_price),
                    total_price=str(item.total_price),
                )
                for item in sorted(items, key=lambda i: i.position)
            ],
        )


class OrderListResponse(BaseModel):
    orders: List[OrderResponse]


class ValidationPreviewResponse(BaseModel):
    """Outcome of validating an order without writing it"""

    valid: bool
    violations: List[Dict[str, Any]]


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None
