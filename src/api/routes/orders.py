"""
Order API Routes

Every write runs the integrity validator before the transactional writer.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.access_guard import require_farm_access
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import AccessContext
from src.app.use_cases.orders import (
    CreateOrderUseCase,
    GetOrderUseCase,
    ListOrdersUseCase,
    OrderListResponse,
    OrderResponse,
    UpdateOrderUseCase,
    ValidateOrderUseCase,
    ValidationPreviewResponse,
)
from src.depends import get_unit_of_work
from src.domain.entities import MembershipRole, OrderStatus
from src.domain.value_objects import OrderDraft, OrderLineDraft

router = APIRouter(prefix="/farms/{farm_id}/orders", tags=["Orders"])

TOLERANCE = Decimal(ApplicationConfig.AMOUNT_TOLERANCE)


class OrderItemRequest(BaseModel):
    """One line of an order; amounts are checked by the integrity validator"""

    product_name: str = Field(..., min_length=1, max_length=255)
    unit: str = Field("unit", max_length=50)
    quantity: Decimal
    unit_price: Decimal
    total_price: Decimal
    catalog_item_id: Optional[UUID] = None


class OrderRequest(BaseModel):
    """
    Order HTTP request payload

    Used for create, replace and validation preview.
    """

    counterparty_id: UUID
    order_number: Optional[str] = Field(None, max_length=64)
    order_date: date
    requested_delivery_date: Optional[date] = None
    actual_delivery_date: Optional[date] = None
    status: OrderStatus = OrderStatus.pending
    subtotal: Decimal
    tax: Decimal = Decimal("0")
    shipping_cost: Decimal = Decimal("0")
    total: Decimal
    notes: Optional[str] = Field(None, max_length=2000)
    items: List[OrderItemRequest] = Field(default_factory=list)

    def to_draft(self) -> OrderDraft:
        return OrderDraft(
            counterparty_id=self.counterparty_id,
            order_number=self.order_number,
            order_date=self.order_date,
            requested_delivery_date=self.requested_delivery_date,
            actual_delivery_date=self.actual_delivery_date,
            status=self.status,
            subtotal=self.subtotal,
            tax=self.tax,
            shipping_cost=self.shipping_cost,
            total=self.total,
            notes=self.notes,
            items=tuple(
                OrderLineDraft(
                    product_name=item.product_name,
                    unit=item.unit,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                    catalog_item_id=item.catalog_item_id,
                )
                for item in self.items
            ),
        )


@router.post(
    "/validate", status_code=status.HTTP_200_OK, response_model=ValidationPreviewResponse
)
async def validate_order(
    request: OrderRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.viewer)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Validate Order without writing; reports every violation"""
    use_case = ValidateOrderUseCase(uow, TOLERANCE)
    result = await use_case.execute(context.farm_id, request.to_draft())

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=OrderResponse)
async def create_order(
    request: OrderRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.team_member)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Order with its items atomically

    Raises:
        - 409 Conflict: CONFLICT (reference vanished, duplicate order number)
        - 422 Unprocessable Entity: VALIDATION_FAILED with details.violations
        - 503 Service Unavailable: WRITE_TIMEOUT
    """
    use_case = CreateOrderUseCase(uow, TOLERANCE, ApplicationConfig.WRITE_TIMEOUT_SECONDS)
    result = await use_case.execute(context.farm_id, context.user_id, request.to_draft())

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put("/{order_id}", status_code=status.HTTP_200_OK, response_model=OrderResponse)
async def update_order(
    order_id: UUID,
    request: OrderRequest,
    context: AccessContext = Depends(require_farm_access(MembershipRole.team_member)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Replace Order header and items atomically

    Raises:
        - 404 Not Found: NOT_FOUND (also for orders of other farms)
        - 409 Conflict: CONFLICT
        - 422 Unprocessable Entity: VALIDATION_FAILED with details.violations
        - 503 Service Unavailable: WRITE_TIMEOUT
    """
    use_case = UpdateOrderUseCase(uow, TOLERANCE, ApplicationConfig.WRITE_TIMEOUT_SECONDS)
    result = await use_case.execute(
        context.farm_id, context.user_id, order_id, request.to_draft()
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=OrderListResponse)
async def list_orders(
    context: AccessContext = Depends(require_farm_access(MembershipRole.viewer)),
    uow: UnitOfWork = Depends(get_unit_of_work),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    counterparty_id: Optional[UUID] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """List Orders of the farm, newest first"""
    result = await ListOrdersUseCase(uow).execute(
        context.farm_id,
        status=order_status,
        counterparty_id=counterparty_id,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/{order_id}", status_code=status.HTTP_200_OK, response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    context: AccessContext = Depends(require_farm_access(MembershipRole.viewer)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Order

    Raises:
        - 404 Not Found: NOT_FOUND (also for orders of other farms)
    """
    result = await GetOrderUseCase(uow).execute(context.farm_id, order_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
