from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from hypothesis import given, settings
from hypothesis import strategies as st

from src.app.services.integrity_validator import Invalid, Valid, validate_order
from src.domain.value_objects import OrderDraft, OrderLineDraft, OrderReferences

FARM_ID = uuid4()
OTHER_FARM_ID = uuid4()
COUNTERPARTY_ID = uuid4()


def make_draft(**overrides) -> OrderDraft:
    values = dict(
        counterparty_id=COUNTERPARTY_ID,
        order_date=date(2025, 3, 1),
        requested_delivery_date=date(2025, 3, 5),
        subtotal=Decimal("100.00"),
        tax=Decimal("8.00"),
        shipping_cost=Decimal("5.00"),
        total=Decimal("113.00"),
        items=(
            OrderLineDraft("Pea shoots", Decimal("4"), Decimal("15.00"), Decimal("60.00")),
            OrderLineDraft("Sunflower", Decimal("2"), Decimal("20.00"), Decimal("40.00")),
        ),
    )
    values.update(overrides)
    return OrderDraft(**values)


def farm_references(**extra_catalog) -> OrderReferences:
    return OrderReferences(counterparties={COUNTERPARTY_ID: FARM_ID}, catalog_items=extra_catalog)


def rules(result):
    return [v.rule for v in result.violations]


def test_consistent_order_is_valid():
    result = validate_order(FARM_ID, make_draft(), farm_references())

    assert isinstance(result, Valid)
    assert result.is_valid
    assert result.violations == ()


def test_wrong_total_reports_expected_and_actual():
    result = validate_order(FARM_ID, make_draft(total=Decimal("112.00")), farm_references())

    assert isinstance(result, Invalid)
    assert len(result.violations) == 1
    violation = result.violations[0]
    assert violation.field == "total"
    assert violation.rule == "TOTAL"
    assert violation.expected == Decimal("113")
    assert violation.actual == Decimal("112")


def test_total_within_tolerance_is_accepted():
    result = validate_order(FARM_ID, make_draft(total=Decimal("113.01")), farm_references())

    assert result.is_valid


def test_subtotal_mismatch_and_line_mismatch_are_both_reported():
    items = (
        OrderLineDraft("Pea shoots", Decimal("4"), Decimal("15.00"), Decimal("61.00")),
        OrderLineDraft("Sunflower", Decimal("2"), Decimal("20.00"), Decimal("40.00")),
    )
    result = validate_order(FARM_ID, make_draft(items=items), farm_references())

    assert isinstance(result, Invalid)
    assert rules(result) == ["LINE_TOTAL", "SUBTOTAL"]
    assert result.violations[0].field == "items[0].total_price"
    assert result.violations[1].expected == Decimal("101.00")


def test_empty_items_is_invalid():
    result = validate_order(
        FARM_ID,
        make_draft(items=(), subtotal=Decimal("0"), tax=Decimal("0"), shipping_cost=Decimal("0"), total=Decimal("0")),
        farm_references(),
    )

    assert rules(result) == ["REQUIRED"]


def test_negative_and_non_finite_amounts():
    result = validate_order(
        FARM_ID,
        make_draft(tax=Decimal("-1"), shipping_cost=Decimal("NaN")),
        farm_references(),
    )

    assert isinstance(result, Invalid)
    by_field = {v.field: v.rule for v in result.violations}
    assert by_field["tax"] == "NON_NEGATIVE"
    assert by_field["shipping_cost"] == "FINITE"
    # The total check is skipped when one of its inputs is unusable
    assert "total" not in by_field


def test_delivery_dates_must_not_precede_order_date():
    result = validate_order(
        FARM_ID,
        make_draft(
            requested_delivery_date=date(2025, 2, 28),
            actual_delivery_date=date(2025, 2, 27),
        ),
        farm_references(),
    )

    assert [(v.field, v.rule) for v in result.violations] == [
        ("requested_delivery_date", "DATE_ORDER"),
        ("actual_delivery_date", "DATE_ORDER"),
    ]


def test_counterparty_from_another_farm_is_not_found():
    references = OrderReferences(counterparties={COUNTERPARTY_ID: OTHER_FARM_ID})

    result = validate_order(FARM_ID, make_draft(), references)

    assert rules(result) == ["REFERENCE_NOT_FOUND"]
    assert result.violations[0].field == "counterparty_id"


def test_catalog_item_outside_farm_is_not_found():
    own_item, foreign_item = uuid4(), uuid4()
    items = (
        OrderLineDraft("Pea shoots", Decimal("4"), Decimal("15.00"), Decimal("60.00"), catalog_item_id=own_item),
        OrderLineDraft("Sunflower", Decimal("2"), Decimal("20.00"), Decimal("40.00"), catalog_item_id=foreign_item),
    )
    references = OrderReferences(
        counterparties={COUNTERPARTY_ID: FARM_ID},
        catalog_items={own_item: FARM_ID, foreign_item: OTHER_FARM_ID},
    )

    result = validate_order(FARM_ID, make_draft(items=items), references)

    assert [(v.field, v.rule) for v in result.violations] == [
        ("items[1].catalog_item_id", "REFERENCE_NOT_FOUND")
    ]


def test_violation_serializes_amounts_and_dates_as_strings():
    result = validate_order(FARM_ID, make_draft(total=Decimal("112.00")), farm_references())

    assert result.to_list() == [
        {
            "field": "total",
            "rule": "TOTAL",
            "expected": "113.00",
            "actual": "112.00",
            "message": "Total should equal subtotal + tax + shipping (113.00)",
        }
    ]


def single_line(quantity, unit_price, total_price, total=None) -> OrderDraft:
    total_price = Decimal(total_price)
    return make_draft(
        items=(OrderLineDraft("Microgreens", Decimal(quantity), Decimal(unit_price), total_price),),
        subtotal=total_price,
        tax=Decimal("0"),
        shipping_cost=Decimal("0"),
        total=Decimal(total) if total is not None else total_price,
    )


def test_money_with_sub_cent_digits_is_rejected_instead_of_rounded():
    result = validate_order(FARM_ID, single_line("1", "100.004", "100.004"), farm_references())

    assert isinstance(result, Invalid)
    assert [(v.field, v.rule) for v in result.violations] == [
        ("items[0].unit_price", "SCALE"),
        ("items[0].total_price", "SCALE"),
        ("subtotal", "SCALE"),
        ("total", "SCALE"),
    ]
    assert result.to_list()[0] == {
        "field": "items[0].unit_price",
        "rule": "SCALE",
        "expected": "<= 2 decimal places",
        "actual": "100.004",
        "message": "items[0].unit_price has more than 2 decimal places",
    }


def test_quantity_allows_three_decimal_places():
    assert validate_order(FARM_ID, single_line("1.500", "10.00", "15.00"), farm_references()).is_valid

    result = validate_order(FARM_ID, single_line("1.0005", "10.00", "10.01"), farm_references())

    assert [(v.field, v.rule) for v in result.violations] == [("items[0].quantity", "SCALE")]


def test_trailing_zeros_beyond_the_column_scale_are_accepted():
    result = validate_order(FARM_ID, single_line("2", "7.5000", "15.000000"), farm_references())

    assert result.is_valid


def test_amounts_too_large_for_storage_are_rejected():
    result = validate_order(
        FARM_ID, single_line("1", "12345678901.00", "12345678901.00"), farm_references()
    )

    by_field = {v.field: v for v in result.violations}
    assert {v.rule for v in result.violations} == {"PRECISION"}
    assert set(by_field) == {"items[0].unit_price", "items[0].total_price", "subtotal", "total"}
    assert by_field["total"].expected == "< 10^10"


def test_quantity_precision_leaves_room_for_three_decimals():
    result = validate_order(
        FARM_ID, single_line("1000000000", "0.01", "10000000.00"), farm_references()
    )

    assert [(v.field, v.rule) for v in result.violations] == [("items[0].quantity", "PRECISION")]


def test_scale_violation_does_not_hide_arithmetic_errors():
    result = validate_order(
        FARM_ID, single_line("1", "100.004", "100.004", total="90.00"), farm_references()
    )

    assert rules(result) == ["SCALE", "SCALE", "SCALE", "TOTAL"]


money = st.decimals(min_value=0, max_value=10000, places=2, allow_nan=False, allow_infinity=False)
lines = st.lists(
    st.tuples(st.integers(min_value=1, max_value=50), money), min_size=1, max_size=8
)


@settings(max_examples=75, deadline=None)
@given(lines=lines, tax=money, shipping=money, lead_days=st.integers(min_value=0, max_value=60))
def test_arithmetically_consistent_orders_are_always_valid(lines, tax, shipping, lead_days):
    items = tuple(
        OrderLineDraft(f"item {i}", Decimal(qty), price, Decimal(qty) * price)
        for i, (qty, price) in enumerate(lines)
    )
    subtotal = sum((item.total_price for item in items), Decimal("0"))
    order_date = date(2025, 1, 1)
    draft = make_draft(
        items=items,
        subtotal=subtotal,
        tax=tax,
        shipping_cost=shipping,
        total=subtotal + tax + shipping,
        order_date=order_date,
        requested_delivery_date=order_date + timedelta(days=lead_days),
    )

    assert validate_order(FARM_ID, draft, farm_references()).is_valid


@settings(max_examples=75, deadline=None)
@given(lines=lines, tax=money, shipping=money, drift=st.integers(min_value=2, max_value=100000))
def test_total_off_by_more_than_tolerance_is_always_rejected(lines, tax, shipping, drift):
    items = tuple(
        OrderLineDraft(f"item {i}", Decimal(qty), price, Decimal(qty) * price)
        for i, (qty, price) in enumerate(lines)
    )
    subtotal = sum((item.total_price for item in items), Decimal("0"))
    draft = make_draft(
        items=items,
        subtotal=subtotal,
        tax=tax,
        shipping_cost=shipping,
        total=subtotal + tax + shipping + Decimal(drift) / 100,
    )

    result = validate_order(FARM_ID, draft, farm_references())

    assert rules(result) == ["TOTAL"]
