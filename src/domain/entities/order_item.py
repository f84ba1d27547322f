"""
OrderItem Entity

Line item of an Order.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class OrderItem(SQLModel, table=True):
    """
    OrderItem entity - one line of an order.

    Business Rules:
    - total_price == quantity * unit_price (checked before write)
    - catalog_item_id, when set, belongs to the same farm as the order
    """

    __tablename__ = "order_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    farm_id: UUID = Field(foreign_key="farms.id", nullable=False, index=True)
    order_id: UUID = Field(foreign_key="orders.id", nullable=False, index=True)
    catalog_item_id: Optional[UUID] = Field(
        default=None, foreign_key="catalog_items.id", index=True
    )

    product_name: str = Field(max_length=255)
    unit: str = Field(default="unit", max_length=50)
    quantity: Decimal = Field(max_digits=12, decimal_places=3)
    unit_price: Decimal = Field(max_digits=12, decimal_places=2)
    total_price: Decimal = Field(max_digits=12, decimal_places=2)

    position: int = Field(default=0)
