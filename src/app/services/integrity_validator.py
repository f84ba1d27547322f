"""
Integrity Validator

Pure checks on an order draft before it reaches storage. Every rule runs
and every violation is collected so the caller can report the full list.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple, Union
from uuid import UUID

from src.domain.value_objects import OrderDraft, OrderReferences

DEFAULT_TOLERANCE = Decimal("0.01")

# Column shapes of the stored amounts: Numeric(12, 2) money, Numeric(12, 3) quantity
MAX_DIGITS = 12
MONEY_PLACES = 2
QUANTITY_PLACES = 3


@dataclass(frozen=True)
class Violation:
    field: str
    rule: str
    expected: Any
    actual: Any
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "rule": self.rule,
            "expected": _render(self.expected),
            "actual": _render(self.actual),
            "message": self.message,
        }


@dataclass(frozen=True)
class Valid:
    violations: Tuple[Violation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    violations: Tuple[Violation, ...]

    @property
    def is_valid(self) -> bool:
        return False

    def to_list(self) -> List[Dict[str, Any]]:
        return [violation.to_dict() for violation in self.violations]


ValidationResult = Union[Valid, Invalid]


def validate_order(
    farm_id: UUID,
    draft: OrderDraft,
    references: OrderReferences,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> ValidationResult:
    """
    Check arithmetic, date and reference rules of an order draft.

    Args:
        farm_id: Farm the order is written to
        draft: Header and line items as submitted
        references: Farm-scoped candidate rows for the referenced ids
        tolerance: Allowed rounding error per comparison (per line for subtotal)

    Returns:
        Valid, or Invalid carrying every violation found
    """
    violations: List[Violation] = []

    if not draft.items:
        violations.append(
            Violation("items", "REQUIRED", ">= 1 line item", 0, "At least one order item is required")
        )

    line_totals: List[Optional[Decimal]] = []
    for index, item in enumerate(draft.items):
        prefix = f"items[{index}]"
        quantity = _amount(violations, f"{prefix}.quantity", item.quantity, QUANTITY_PLACES)
        unit_price = _amount(violations, f"{prefix}.unit_price", item.unit_price)
        total_price = _amount(violations, f"{prefix}.total_price", item.total_price)
        line_totals.append(total_price)

        if quantity is not None and unit_price is not None and total_price is not None:
            expected = quantity * unit_price
            if abs(total_price - expected) > tolerance:
                violations.append(
                    Violation(
                        f"{prefix}.total_price",
                        "LINE_TOTAL",
                        expected,
                        total_price,
                        f"Line total should equal quantity x unit price ({expected})",
                    )
                )

        if item.catalog_item_id is not None and not _owned(
            references.catalog_items, item.catalog_item_id, farm_id
        ):
            violations.append(_not_found(f"{prefix}.catalog_item_id", item.catalog_item_id))

    subtotal = _amount(violations, "subtotal", draft.subtotal)
    tax = _amount(violations, "tax", draft.tax)
    shipping_cost = _amount(violations, "shipping_cost", draft.shipping_cost)
    total = _amount(violations, "total", draft.total)

    if subtotal is not None and draft.items and all(t is not None for t in line_totals):
        expected_subtotal = sum(line_totals, Decimal("0"))
        # Rounding error accumulates per line
        if abs(subtotal - expected_subtotal) > tolerance * max(1, len(line_totals)):
            violations.append(
                Violation(
                    "subtotal",
                    "SUBTOTAL",
                    expected_subtotal,
                    subtotal,
                    f"Subtotal should equal the sum of line totals ({expected_subtotal})",
                )
            )

    if None not in (subtotal, tax, shipping_cost, total):
        expected_total = subtotal + tax + shipping_cost
        if abs(total - expected_total) > tolerance:
            violations.append(
                Violation(
                    "total",
                    "TOTAL",
                    expected_total,
                    total,
                    f"Total should equal subtotal + tax + shipping ({expected_total})",
                )
            )

    if draft.requested_delivery_date is not None and draft.requested_delivery_date < draft.order_date:
        violations.append(
            Violation(
                "requested_delivery_date",
                "DATE_ORDER",
                f">= {draft.order_date.isoformat()}",
                draft.requested_delivery_date,
                "Requested delivery date cannot be earlier than the order date",
            )
        )

    if (
        draft.actual_delivery_date is not None
        and draft.requested_delivery_date is not None
        and draft.actual_delivery_date < draft.requested_delivery_date
    ):
        violations.append(
            Violation(
                "actual_delivery_date",
                "DATE_ORDER",
                f">= {draft.requested_delivery_date.isoformat()}",
                draft.actual_delivery_date,
                "Actual delivery date cannot be earlier than the requested delivery date",
            )
        )

    if not _owned(references.counterparties, draft.counterparty_id, farm_id):
        violations.append(_not_found("counterparty_id", draft.counterparty_id))

    if violations:
        return Invalid(tuple(violations))
    return Valid()


def _amount(
    violations: List[Violation], field: str, value: Any, places: int = MONEY_PLACES
) -> Optional[Decimal]:
    """
    Finite, non-negative Decimal or None (with the violation recorded).

    Amounts that would not survive storage unchanged (too many integer
    digits or decimal places for the column) are reported but still
    returned, so the arithmetic rules run on them too.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        violations.append(Violation(field, "FINITE", "finite number", value, f"{field} must be a number"))
        return None

    if not amount.is_finite():
        violations.append(Violation(field, "FINITE", "finite number", amount, f"{field} must be finite"))
        return None

    if amount < 0:
        violations.append(Violation(field, "NON_NEGATIVE", ">= 0", amount, f"{field} cannot be negative"))
        return None

    integer_digits = MAX_DIGITS - places
    if amount.adjusted() >= integer_digits:
        violations.append(
            Violation(
                field,
                "PRECISION",
                f"< 10^{integer_digits}",
                amount,
                f"{field} has more than {integer_digits} integer digits",
            )
        )
    elif amount != amount.quantize(Decimal(1).scaleb(-places)):
        violations.append(
            Violation(
                field,
                "SCALE",
                f"<= {places} decimal places",
                amount,
                f"{field} has more than {places} decimal places",
            )
        )

    return amount


def _owned(candidates, ref_id: UUID, farm_id: UUID) -> bool:
    return candidates.get(ref_id) == farm_id


def _not_found(field: str, ref_id: UUID) -> Violation:
    # Same wording whether the row is absent or owned by another farm
    return Violation(field, "REFERENCE_NOT_FOUND", "existing reference", str(ref_id), f"{field} not found")


def _render(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (int, float, str)) or value is None:
        return value
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)
