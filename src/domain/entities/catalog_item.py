"""
CatalogItem Entity

Farm-owned sellable item referenced by order lines.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class CatalogItem(SQLModel, table=True):
    __tablename__ = "catalog_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    farm_id: UUID = Field(foreign_key="farms.id", nullable=False, index=True)

    name: str = Field(max_length=255)
    unit: str = Field(default="unit", max_length=50)
    unit_price: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_catalog_item_farm_name", "farm_id", "name"),)
