"""
Order Entity

Order header; always written together with its OrderItems.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import OrderStatus


class Order(SQLModel, table=True):
    """
    Order entity - header of a composite write.

    Business Rules:
    - total == subtotal + tax + shipping_cost (checked before write)
    - subtotal == sum of item total_price (checked before write)
    - counterparty_id must be a party holding a role in farm_id
    - order_number is unique within a farm
    """

    __tablename__ = "orders"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    farm_id: UUID = Field(foreign_key="farms.id", nullable=False, index=True)

    order_number: str = Field(max_length=64)
    counterparty_id: UUID = Field(foreign_key="parties.id", nullable=False, index=True)

    order_date: date = Field(nullable=False)
    requested_delivery_date: Optional[date] = None
    actual_delivery_date: Optional[date] = None

    status: OrderStatus = Field(default=OrderStatus.pending)

    subtotal: Decimal = Field(max_digits=12, decimal_places=2)
    tax: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    shipping_cost: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    total: Decimal = Field(max_digits=12, decimal_places=2)

    notes: Optional[str] = Field(default=None, max_length=2000)
    created_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_order_farm_number", "farm_id", "order_number", unique=True),
        Index("idx_order_farm_status", "farm_id", "status"),
    )
