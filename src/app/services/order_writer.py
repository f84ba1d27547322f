"""
Transactional Order Writer

Persists an order header and its line items as one unit. Runs inside a
unit of work the caller has already entered.
"""

import asyncio
import logging
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, Order, OrderItem, RoleFamily
from src.domain.value_objects import OrderDraft

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for query_canceled (statement_timeout)
QUERY_CANCELED = "57014"


def generate_order_number() -> str:
    return f"ORD-{utcnow():%Y%m%d}-{uuid4().hex[:8].upper()}"


class OrderWriter:
    """
    Writes orders atomically.

    Business Rules:
    - Referenced catalog items and the counterparty's customer role are
      re-read with row locks; anything that vanished since validation is a
      CONFLICT
    - Integrity errors (duplicate order number, broken FK) are a CONFLICT
    - Storage timeouts are WRITE_TIMEOUT, other storage errors INTERNAL
    - Every failure rolls the transaction back; nothing is partially written
    """

    def __init__(self, uow: UnitOfWork, write_timeout: float):
        self.uow = uow
        self.write_timeout = write_timeout

    async def write_order(
        self,
        farm_id: UUID,
        draft: OrderDraft,
        created_by: Optional[UUID] = None,
        order_id: Optional[UUID] = None,
    ) -> Result[Tuple[Order, List[OrderItem]]]:
        """
        Create an order, or replace header and items of ``order_id``.

        Args:
            farm_id: Farm the order belongs to
            draft: Validated header and line items
            created_by: Acting user, recorded on the order and audit event
            order_id: Existing order to replace; None creates a new order

        Returns:
            Result with (order, items), or Error(CONFLICT | NOT_FOUND |
            WRITE_TIMEOUT | INTERNAL)
        """
        try:
            return await asyncio.wait_for(
                self._write(farm_id, draft, created_by, order_id),
                timeout=self.write_timeout,
            )
        except asyncio.TimeoutError:
            await self.uow.rollback()
            logger.warning("Order write timed out (farm=%s, order=%s)", farm_id, order_id)
            return Return.err(Error("WRITE_TIMEOUT", "Write did not complete in time"))
        except IntegrityError as exc:
            await self.uow.rollback()
            logger.warning(
                "Order write rejected by storage (farm=%s, order=%s): %s",
                farm_id,
                order_id,
                exc.orig,
            )
            return Return.err(Error("CONFLICT", "Order conflicts with existing data"))
        except DBAPIError as exc:
            await self.uow.rollback()
            if _is_statement_timeout(exc):
                logger.warning("Order write hit statement timeout (farm=%s)", farm_id)
                return Return.err(Error("WRITE_TIMEOUT", "Write did not complete in time"))
            logger.exception("Order write failed (farm=%s, order=%s)", farm_id, order_id)
            return Return.err(Error("INTERNAL", "Internal server error"))
        except SQLAlchemyError:
            await self.uow.rollback()
            logger.exception("Order write failed (farm=%s, order=%s)", farm_id, order_id)
            return Return.err(Error("INTERNAL", "Internal server error"))

    async def _write(
        self,
        farm_id: UUID,
        draft: OrderDraft,
        created_by: Optional[UUID],
        order_id: Optional[UUID],
    ) -> Result[Tuple[Order, List[OrderItem]]]:
        await self.uow.set_statement_timeout(self.write_timeout)

        counterparty_roles = await self.uow.party_roles.get_by_party_and_farm(
            draft.counterparty_id, farm_id, for_update=True
        )
        if not any(role.role_family == RoleFamily.customer for role in counterparty_roles):
            await self.uow.rollback()
            return Return.err(Error("CONFLICT", "Counterparty is no longer available"))

        catalog_ids = draft.catalog_item_ids
        if catalog_ids:
            catalog_items = await self.uow.catalog_items.get_by_ids_in_farm(
                farm_id, catalog_ids, for_update=True
            )
            if {item.id for item in catalog_items} != set(catalog_ids):
                await self.uow.rollback()
                return Return.err(
                    Error("CONFLICT", "A referenced catalog item is no longer available")
                )

        if order_id is None:
            order = Order(
                farm_id=farm_id,
                order_number=draft.order_number or generate_order_number(),
                counterparty_id=draft.counterparty_id,
                order_date=draft.order_date,
                requested_delivery_date=draft.requested_delivery_date,
                actual_delivery_date=draft.actual_delivery_date,
                status=draft.status,
                subtotal=draft.subtotal,
                tax=draft.tax,
                shipping_cost=draft.shipping_cost,
                total=draft.total,
                notes=draft.notes,
                created_by=created_by,
            )
            order = await self.uow.orders.create(order)
            action = "order_created"
        else:
            order = await self.uow.orders.get_in_farm(order_id, farm_id, for_update=True)
            if order is None:
                await self.uow.rollback()
                return Return.err(Error("NOT_FOUND", "Order not found"))

            if draft.order_number:
                order.order_number = draft.order_number
            order.counterparty_id = draft.counterparty_id
            order.order_date = draft.order_date
            order.requested_delivery_date = draft.requested_delivery_date
            order.actual_delivery_date = draft.actual_delivery_date
            order.status = draft.status
            order.subtotal = draft.subtotal
            order.tax = draft.tax
            order.shipping_cost = draft.shipping_cost
            order.total = draft.total
            order.notes = draft.notes
            order = await self.uow.orders.update(order)

            # Items are replaced wholesale
            await self.uow.order_items.delete_by_order(order.id)
            action = "order_updated"

        items = [
            OrderItem(
                farm_id=farm_id,
                order_id=order.id,
                catalog_item_id=line.catalog_item_id,
                product_name=line.product_name,
                unit=line.unit,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total_price=line.total_price,
                position=position,
            )
            for position, line in enumerate(draft.items)
        ]
        items = await self.uow.order_items.create_many(items)

        await self.uow.audit_events.create(
            AuditEvent(
                farm_id=farm_id,
                user_id=created_by,
                action=action,
                event_metadata={
                    "order_id": str(order.id),
                    "order_number": order.order_number,
                    "item_count": len(items),
                    "total": str(order.total),
                },
            )
        )

        await self.uow.commit()
        logger.info("%s %s in farm %s", action, order.id, farm_id)
        return Return.ok((order, items))


def _is_statement_timeout(exc: DBAPIError) -> bool:
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return code == QUERY_CANCELED
