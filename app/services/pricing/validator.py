"""Order totals validation."""
from typing import List

from app.services.pricing.calculator import pre_discount_total
from app.services.pricing.models import OrderItem, OrderTotals, ValidationReport

_NON_NEGATIVE_FIELDS = (
    ("subtotal", "Subtotal"),
    ("attributes_total", "Attributes total"),
    ("delivery_fee", "Delivery fee"),
    ("service_charges", "Service charges"),
    ("discount_amount", "Discount amount"),
    ("final_total", "Final total"),
)


def validate_order_calculations(
    items: List[OrderItem], totals: OrderTotals
) -> ValidationReport:
    """
    Check computed totals against the pricing invariants.

    Every check runs and every violation is reported. Nothing is raised;
    callers decide whether an invalid report should block checkout.
    """
    errors: List[str] = []

    for field_name, label in _NON_NEGATIVE_FIELDS:
        if getattr(totals, field_name) < 0:
            errors.append(f"{label} cannot be negative")

    for index, item in enumerate(items, start=1):
        if item.quantity <= 0:
            errors.append(f"Item {index} has invalid quantity: {item.quantity}")

    total_before_discount = pre_discount_total(
        totals.subtotal,
        totals.attributes_total,
        totals.delivery_fee,
        totals.service_charges,
    )
    if totals.discount_amount > total_before_discount:
        errors.append("Discount amount exceeds order total")

    return ValidationReport(is_valid=len(errors) == 0, errors=errors)
