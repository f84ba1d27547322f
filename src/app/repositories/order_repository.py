from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from src.domain.entities import Order, OrderStatus


@dataclass(frozen=True)
class OrderSummary:
    order_count: int
    revenue: Decimal
    last_order_date: Optional[date]


class IOrderRepository(ABC):
    """Order repository interface - application layer"""

    @abstractmethod
    async def get_in_farm(
        self, order_id: UUID, farm_id: UUID, for_update: bool = False
    ) -> Optional[Order]:
        """Get order only if it belongs to the farm"""
        pass

    @abstractmethod
    async def list_by_farm(
        self,
        farm_id: UUID,
        status: Optional[OrderStatus] = None,
        counterparty_id: Optional[UUID] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        """Orders of a farm, newest first"""
        pass

    @abstractmethod
    async def count_by_counterparty(self, farm_id: UUID, party_id: UUID) -> int:
        """Number of farm orders referencing the party"""
        pass

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """Create a new order header"""
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        """Update an order header"""
        pass

    @abstractmethod
    async def summarize_by_counterparties(
        self, farm_id: UUID, party_ids: Iterable[UUID]
    ) -> Dict[UUID, OrderSummary]:
        """Order count, revenue and last order date per counterparty in the farm"""
        pass
