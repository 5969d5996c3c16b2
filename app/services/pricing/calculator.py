"""Order pricing and totals calculation."""
import logging
import math
from typing import Iterable, List, Optional

from app.services.pricing.guards import at_least_one, non_negative, to_number
from app.services.pricing.models import (
    DiscountInfo,
    OrderItem,
    OrderTotals,
    SelectedAttribute,
)
from app.services.pricing.price import base_price_of

logger = logging.getLogger(__name__)


def calculate_attribute_total(
    selected_attributes: Optional[Iterable[SelectedAttribute]] = None,
) -> float:
    """
    Sum the unit surcharge of the chosen attribute items.

    Each chosen item contributes its price times its own quantity. Price is
    floored at 0 and quantity at 1 before they are multiplied.
    """
    if not selected_attributes:
        return 0.0
    return math.fsum(
        non_negative(selected.item_price) * at_least_one(selected.quantity)
        for attribute in selected_attributes
        for selected in attribute.selected_items
    )


def resolve_authoritative_total(
    declared: Optional[float], computed: float
) -> float:
    """
    Pick the line total to charge.

    A caller-declared total (e.g. a server-confirmed item total carrying a
    time-limited price override) wins over the computed one. Whichever is
    used is floored at 0.
    """
    if declared is None:
        return non_negative(computed)
    if to_number(declared) != to_number(computed):
        logger.debug(
            f"[PRICING] Declared item total {declared} differs from computed {computed}"
        )
    return non_negative(declared)


def pre_discount_total(
    subtotal: float,
    attributes_total: float,
    delivery_fee: float,
    service_charges: float,
) -> float:
    """Order total before any discount, summed in a fixed field order."""
    values = [subtotal, attributes_total, delivery_fee, service_charges]
    if not all(math.isfinite(value) for value in values):
        # fsum raises on mixed infinities
        return sum(values)
    return math.fsum(values)


def _line_base_total(item: OrderItem) -> float:
    return non_negative(base_price_of(item.price) * at_least_one(item.quantity))


def _line_attributes_total(item: OrderItem) -> float:
    if item.selected_attributes is None:
        return 0.0
    return calculate_attribute_total(item.selected_attributes) * at_least_one(
        item.quantity
    )


def calculate_item_total(item: OrderItem) -> float:
    """
    Calculate one line item's total, attributes included.

    Attribute surcharges are multiplied by the item quantity on top of the
    per-choice quantity. A declared item_total takes precedence.
    """
    computed = _line_base_total(item) + _line_attributes_total(item)
    return resolve_authoritative_total(item.item_total, computed)


def calculate_order_totals(
    items: List[OrderItem],
    delivery_fee: float = 0,
    service_charges: float = 0,
    discount: Optional[DiscountInfo] = None,
) -> OrderTotals:
    """
    Fold line items, fees and an optional discount into order totals.

    The subtotal uses base prices only and ignores any declared item_total.
    The discount is capped so the final total never goes below 0; the
    returned discount_amount and savings are the effective (capped) figure.
    """
    subtotal = math.fsum(_line_base_total(item) for item in items)
    attributes_total = math.fsum(_line_attributes_total(item) for item in items)

    safe_delivery_fee = non_negative(delivery_fee)
    safe_service_charges = non_negative(service_charges)
    requested_discount = non_negative(discount.discount_amount) if discount else 0.0

    total_before_discount = pre_discount_total(
        subtotal, attributes_total, safe_delivery_fee, safe_service_charges
    )
    final_total = non_negative(total_before_discount - requested_discount)
    actual_savings = non_negative(total_before_discount - final_total)

    if requested_discount > actual_savings:
        logger.debug(
            f"[PRICING] Discount capped - requested: {requested_discount}, "
            f"applied: {actual_savings}"
        )

    return OrderTotals(
        subtotal=non_negative(subtotal),
        attributes_total=non_negative(attributes_total),
        delivery_fee=safe_delivery_fee,
        service_charges=safe_service_charges,
        discount_amount=actual_savings,
        final_total=final_total,
        savings=actual_savings,
    )


def calculate_discount_savings(original_total: float, discount_amount: float) -> float:
    """Amount actually saved when a discount is applied to a total."""
    return min(discount_amount, original_total)


def calculate_final_total(original_total: float, discount_amount: float = 0) -> float:
    """Total after a discount, floored at 0."""
    return non_negative(original_total - discount_amount)
