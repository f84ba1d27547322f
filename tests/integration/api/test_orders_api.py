from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import delete, func
from sqlmodel import select

from tests.utils.json_compare import same_amounts
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.order_writer import OrderWriter
from src.domain.entities import AuditEvent, CatalogItem, Order, OrderItem
from src.domain.value_objects import OrderDraft, OrderLineDraft

AMOUNTS = ("subtotal", "tax", "shipping_cost", "total")


@pytest_asyncio.fixture
async def shop(client: AsyncClient, seed, auth_headers, test_data):
    """Owner of two farms with one business customer in farm A"""
    user_id = await seed.user("owner@farm.io")
    farm_a = await seed.farm("Farm A", owner_id=user_id)
    farm_b = await seed.farm("Farm B", owner_id=user_id)
    response = await client.post(
        f"/api/farms/{farm_a}/parties",
        json=test_data.get_copy("business_customer"),
        headers=auth_headers(user_id),
    )
    assert response.status_code == 201
    return {
        "user_id": user_id,
        "farm_a": farm_a,
        "farm_b": farm_b,
        "customer_id": response.json()["id"],
        "headers": auth_headers(user_id),
    }


def order_payload(test_data, counterparty_id, **overrides):
    payload = test_data.get_copy("valid_order")
    payload["counterparty_id"] = counterparty_id
    payload.update(overrides)
    return payload


async def count_rows(db_session, model) -> int:
    result = await db_session.exec(select(func.count()).select_from(model))
    return result.one()


@pytest.mark.asyncio
async def test_create_order_round_trip(client: AsyncClient, shop, test_data):
    payload = order_payload(test_data, shop["customer_id"])

    created = await client.post(
        f"/api/farms/{shop['farm_a']}/orders", json=payload, headers=shop["headers"]
    )
    assert created.status_code == 201
    order = created.json()
    assert order["order_number"].startswith("ORD-")
    assert order["farm_id"] == str(shop["farm_a"])
    assert same_amounts(order, payload, AMOUNTS)

    fetched = await client.get(
        f"/api/farms/{shop['farm_a']}/orders/{order['id']}", headers=shop["headers"]
    )
    assert fetched.status_code == 200
    stored = fetched.json()
    assert same_amounts(stored, payload, AMOUNTS)
    assert [item["product_name"] for item in stored["items"]] == ["Pea shoots", "Sunflower"]
    for item, sent in zip(stored["items"], payload["items"]):
        assert same_amounts(item, sent, ("quantity", "unit_price", "total_price"))

    listed = await client.get(f"/api/farms/{shop['farm_a']}/orders", headers=shop["headers"])
    assert [o["id"] for o in listed.json()["orders"]] == [order["id"]]


@pytest.mark.asyncio
async def test_total_mismatch_is_rejected_and_nothing_stored(
    client: AsyncClient, shop, test_data, db_session
):
    payload = order_payload(test_data, shop["customer_id"], total="112.00")

    response = await client.post(
        f"/api/farms/{shop['farm_a']}/orders", json=payload, headers=shop["headers"]
    )

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert len(error["details"]["violations"]) == 1
    violation = error["details"]["violations"][0]
    assert violation["rule"] == "TOTAL"
    assert Decimal(violation["expected"]) == Decimal("113")
    assert Decimal(violation["actual"]) == Decimal("112")

    assert await count_rows(db_session, Order) == 0
    assert await count_rows(db_session, OrderItem) == 0


@pytest.mark.asyncio
async def test_validate_reports_without_writing(client: AsyncClient, shop, test_data, db_session):
    payload = order_payload(
        test_data, shop["customer_id"], total="112.00", requested_delivery_date="2025-02-01"
    )

    response = await client.post(
        f"/api/farms/{shop['farm_a']}/orders/validate", json=payload, headers=shop["headers"]
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert {v["rule"] for v in data["violations"]} == {"TOTAL", "DATE_ORDER"}
    assert await count_rows(db_session, Order) == 0


@pytest.mark.asyncio
async def test_counterparty_of_another_farm_is_reference_violation(
    client: AsyncClient, shop, test_data
):
    payload = order_payload(test_data, shop["customer_id"])

    response = await client.post(
        f"/api/farms/{shop['farm_b']}/orders", json=payload, headers=shop["headers"]
    )

    assert response.status_code == 422
    violations = response.json()["error"]["details"]["violations"]
    assert [(v["field"], v["rule"]) for v in violations] == [
        ("counterparty_id", "REFERENCE_NOT_FOUND")
    ]


@pytest.mark.asyncio
async def test_order_of_another_farm_is_not_found(client: AsyncClient, shop, test_data):
    created = await client.post(
        f"/api/farms/{shop['farm_a']}/orders",
        json=order_payload(test_data, shop["customer_id"]),
        headers=shop["headers"],
    )
    order_id = created.json()["id"]

    response = await client.get(
        f"/api/farms/{shop['farm_b']}/orders/{order_id}", headers=shop["headers"]
    )
    update = await client.put(
        f"/api/farms/{shop['farm_b']}/orders/{order_id}",
        json=order_payload(test_data, shop["customer_id"]),
        headers=shop["headers"],
    )

    assert response.status_code == 404
    assert update.status_code == 404


@pytest.mark.asyncio
async def test_update_replaces_items(client: AsyncClient, shop, test_data, db_session):
    created = await client.post(
        f"/api/farms/{shop['farm_a']}/orders",
        json=order_payload(test_data, shop["customer_id"]),
        headers=shop["headers"],
    )
    order = created.json()

    replacement = order_payload(
        test_data,
        shop["customer_id"],
        subtotal="45.00",
        tax="0",
        shipping_cost="0",
        total="45.00",
        status="confirmed",
        items=[
            {
                "product_name": "Radish",
                "unit": "tray",
                "quantity": "3",
                "unit_price": "15.00",
                "total_price": "45.00",
            }
        ],
    )
    response = await client.put(
        f"/api/farms/{shop['farm_a']}/orders/{order['id']}",
        json=replacement,
        headers=shop["headers"],
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["order_number"] == order["order_number"]
    assert updated["status"] == "confirmed"
    assert [item["product_name"] for item in updated["items"]] == ["Radish"]
    assert await count_rows(db_session, OrderItem) == 1


@pytest.mark.asyncio
async def test_catalog_item_references_must_belong_to_farm(
    client: AsyncClient, seed, shop, test_data
):
    foreign_item = await seed.catalog_item(shop["farm_b"], "Pea shoots")
    payload = order_payload(test_data, shop["customer_id"])
    payload["items"][0]["catalog_item_id"] = str(foreign_item)

    response = await client.post(
        f"/api/farms/{shop['farm_a']}/orders", json=payload, headers=shop["headers"]
    )

    assert response.status_code == 422
    violations = response.json()["error"]["details"]["violations"]
    assert [(v["field"], v["rule"]) for v in violations] == [
        ("items[0].catalog_item_id", "REFERENCE_NOT_FOUND")
    ]


@pytest.mark.asyncio
async def test_catalog_item_deleted_before_write_is_conflict(seed, shop, db_session):
    item_id = await seed.catalog_item(shop["farm_a"], "Pea shoots")
    farm_id = shop["farm_a"]
    draft = OrderDraft(
        counterparty_id=UUID(shop["customer_id"]),
        order_date=date(2025, 3, 1),
        subtotal=Decimal("60.00"),
        tax=Decimal("0"),
        shipping_cost=Decimal("0"),
        total=Decimal("60.00"),
        items=(
            OrderLineDraft(
                "Pea shoots", Decimal("4"), Decimal("15.00"), Decimal("60.00"), catalog_item_id=item_id
            ),
        ),
    )

    # Removed between validation and write
    await db_session.execute(delete(CatalogItem).where(CatalogItem.id == item_id))
    await db_session.commit()

    uow = SqlAlchemyUnitOfWork(db_session)
    async with uow:
        result = await OrderWriter(uow, write_timeout=5).write_order(farm_id, draft)

    assert result.is_err()
    assert result.error.code == "CONFLICT"
    assert await count_rows(db_session, Order) == 0
    assert await count_rows(db_session, OrderItem) == 0
    actions = (await db_session.exec(select(AuditEvent.action))).all()
    assert "order_created" not in actions


@pytest.mark.asyncio
async def test_party_with_orders_keeps_its_role(client: AsyncClient, shop, test_data):
    await client.post(
        f"/api/farms/{shop['farm_a']}/orders",
        json=order_payload(test_data, shop["customer_id"]),
        headers=shop["headers"],
    )

    response = await client.delete(
        f"/api/farms/{shop['farm_a']}/parties/{shop['customer_id']}/roles/customer_business",
        headers=shop["headers"],
    )

    assert response.status_code == 409
    assert response.json()["error"]["details"] == {"order_count": 1}


@pytest.mark.asyncio
async def test_unknown_order_is_not_found(client: AsyncClient, shop):
    response = await client.get(
        f"/api/farms/{shop['farm_a']}/orders/{uuid4()}", headers=shop["headers"]
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_sub_cent_amounts_are_rejected_not_rounded(
    client: AsyncClient, shop, test_data, db_session
):
    payload = order_payload(
        test_data,
        shop["customer_id"],
        subtotal="100.004",
        tax="0",
        shipping_cost="0",
        total="100.004",
        items=[
            {
                "product_name": "Pea shoots",
                "unit": "tray",
                "quantity": "1",
                "unit_price": "100.004",
                "total_price": "100.004",
            }
        ],
    )

    response = await client.post(
        f"/api/farms/{shop['farm_a']}/orders", json=payload, headers=shop["headers"]
    )

    assert response.status_code == 422
    violations = response.json()["error"]["details"]["violations"]
    assert [(v["field"], v["rule"]) for v in violations] == [
        ("items[0].unit_price", "SCALE"),
        ("items[0].total_price", "SCALE"),
        ("subtotal", "SCALE"),
        ("total", "SCALE"),
    ]
    assert await count_rows(db_session, Order) == 0
    assert await count_rows(db_session, OrderItem) == 0


@pytest.mark.asyncio
async def test_accepted_amounts_are_stored_unchanged(client: AsyncClient, shop, test_data):
    payload = order_payload(
        test_data,
        shop["customer_id"],
        subtotal="9.00",
        tax="0.72",
        shipping_cost="0",
        total="9.72",
        items=[
            {
                "product_name": "Basil",
                "unit": "kg",
                "quantity": "1.125",
                "unit_price": "8.00",
                "total_price": "9.00",
            }
        ],
    )

    created = await client.post(
        f"/api/farms/{shop['farm_a']}/orders", json=payload, headers=shop["headers"]
    )
    assert created.status_code == 201

    stored = (
        await client.get(
            f"/api/farms/{shop['farm_a']}/orders/{created.json()['id']}", headers=shop["headers"]
        )
    ).json()
    assert same_amounts(stored, payload, AMOUNTS)
    assert same_amounts(stored["items"][0], payload["items"][0], ("quantity", "unit_price", "total_price"))


@pytest.mark.asyncio
async def test_employee_cannot_be_an_order_counterparty(
    client: AsyncClient, shop, test_data, db_session
):
    employee = await client.post(
        f"/api/farms/{shop['farm_a']}/parties",
        json={
            "display_name": "Jo",
            "kind": "individual",
            "roles": [{"role_type": "employee"}],
            "contacts": [{"channel": "email", "value": "jo@farm.io"}],
        },
        headers=shop["headers"],
    )
    assert employee.status_code == 201

    response = await client.post(
        f"/api/farms/{shop['farm_a']}/orders",
        json=order_payload(test_data, employee.json()["id"]),
        headers=shop["headers"],
    )

    assert response.status_code == 422
    violations = response.json()["error"]["details"]["violations"]
    assert [(v["field"], v["rule"]) for v in violations] == [
        ("counterparty_id", "REFERENCE_NOT_FOUND")
    ]
    assert await count_rows(db_session, Order) == 0
