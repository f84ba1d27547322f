from abc import ABC, abstractmethod
from typing import Iterable, List
from uuid import UUID

from src.domain.entities import OrderItem


class IOrderItemRepository(ABC):
    """OrderItem repository interface - application layer"""

    @abstractmethod
    async def get_by_order_ids(self, order_ids: Iterable[UUID]) -> List[OrderItem]:
        """Line items of the given orders, in position order"""
        pass

    @abstractmethod
    async def create_many(self, items: List[OrderItem]) -> List[OrderItem]:
        """Insert line items"""
        pass

    @abstractmethod
    async def delete_by_order(self, order_id: UUID) -> None:
        """Delete every line item of an order"""
        pass
