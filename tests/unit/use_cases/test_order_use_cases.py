from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from src.app.use_cases.orders import CreateOrderUseCase, UpdateOrderUseCase, ValidateOrderUseCase
from src.domain.entities import PartyRole, PartyRoleType, RoleFamily
from src.domain.value_objects import OrderDraft, OrderLineDraft

FARM_ID = uuid4()
USER_ID = uuid4()
COUNTERPARTY_ID = uuid4()
TOLERANCE = Decimal("0.01")


def draft(total="113.00") -> OrderDraft:
    return OrderDraft(
        counterparty_id=COUNTERPARTY_ID,
        order_date=date(2025, 3, 1),
        subtotal=Decimal("100.00"),
        tax=Decimal("8.00"),
        shipping_cost=Decimal("5.00"),
        total=Decimal(total),
        items=(
            OrderLineDraft("Pea shoots", Decimal("4"), Decimal("15.00"), Decimal("60.00")),
            OrderLineDraft("Sunflower", Decimal("2"), Decimal("20.00"), Decimal("40.00")),
        ),
    )


@pytest.fixture
def farm_uow(mock_uow):
    role = PartyRole(
        party_id=COUNTERPARTY_ID,
        farm_id=FARM_ID,
        role_type=PartyRoleType.customer_business,
        role_family=RoleFamily.customer,
    )
    mock_uow.party_roles.get_by_parties_in_farm.return_value = [role]
    mock_uow.party_roles.get_by_party_and_farm.return_value = [role]
    return mock_uow


@pytest.mark.asyncio
async def test_create_valid_order(farm_uow):
    result = await CreateOrderUseCase(farm_uow, TOLERANCE, 5).execute(FARM_ID, USER_ID, draft())

    assert result.is_ok()
    response = result.value
    assert response.total == "113.00"
    assert [item.total_price for item in response.items] == ["60.00", "40.00"]
    farm_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_invalid_order_writes_nothing(farm_uow):
    result = await CreateOrderUseCase(farm_uow, TOLERANCE, 5).execute(
        FARM_ID, USER_ID, draft(total="112.00")
    )

    assert result.error.code == "VALIDATION_FAILED"
    assert result.error.details["violations"] == [
        {
            "field": "total",
            "rule": "TOTAL",
            "expected": "113.00",
            "actual": "112.00",
            "message": "Total should equal subtotal + tax + shipping (113.00)",
        }
    ]
    farm_uow.orders.create.assert_not_awaited()
    farm_uow.order_items.create_many.assert_not_awaited()
    farm_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_with_foreign_counterparty_is_reference_violation(mock_uow):
    mock_uow.party_roles.get_by_parties_in_farm.return_value = []

    result = await CreateOrderUseCase(mock_uow, TOLERANCE, 5).execute(FARM_ID, USER_ID, draft())

    assert result.error.code == "VALIDATION_FAILED"
    assert [v["rule"] for v in result.error.details["violations"]] == ["REFERENCE_NOT_FOUND"]


@pytest.mark.asyncio
async def test_update_of_other_farms_order_is_not_found(farm_uow):
    farm_uow.orders.get_in_farm.return_value = None
    order_id = uuid4()

    result = await UpdateOrderUseCase(farm_uow, TOLERANCE, 5).execute(
        FARM_ID, USER_ID, order_id, draft()
    )

    assert result.error.code == "NOT_FOUND"
    farm_uow.orders.get_in_farm.assert_awaited_once_with(order_id, FARM_ID)


@pytest.mark.asyncio
async def test_validate_preview_never_writes(farm_uow):
    result = await ValidateOrderUseCase(farm_uow, TOLERANCE).execute(FARM_ID, draft(total="112.00"))

    assert result.value.valid is False
    assert result.value.violations[0]["rule"] == "TOTAL"
    farm_uow.orders.create.assert_not_awaited()
    farm_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_employee_of_the_farm_is_not_a_counterparty(mock_uow):
    employee = PartyRole(
        party_id=COUNTERPARTY_ID,
        farm_id=FARM_ID,
        role_type=PartyRoleType.employee,
        role_family=RoleFamily.employee,
    )
    mock_uow.party_roles.get_by_parties_in_farm.return_value = [employee]

    result = await CreateOrderUseCase(mock_uow, TOLERANCE, 5).execute(FARM_ID, USER_ID, draft())

    assert result.error.code == "VALIDATION_FAILED"
    assert [(v["field"], v["rule"]) for v in result.error.details["violations"]] == [
        ("counterparty_id", "REFERENCE_NOT_FOUND")
    ]
    mock_uow.orders.create.assert_not_awaited()
