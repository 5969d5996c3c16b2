"""Order summary reconciliation for stored orders."""
import logging
from typing import Any, Dict, Mapping, Optional

from app.services.pricing.calculator import calculate_order_totals
from app.services.pricing.formatting import get_discount_display_text
from app.services.pricing.models import (
    DiscountInfo,
    DiscountType,
    OrderItem,
    OrderSummary,
    ServiceCharges,
)
from app.services.pricing.validator import validate_order_calculations

logger = logging.getLogger(__name__)

_DISCOUNT_DEFAULTS: Dict[str, Any] = {
    "discountId": "",
    "code": "",
    "name": "",
    "discountType": DiscountType.FIXED.value,
    "discountValue": 0,
    "discountAmount": 0,
    "originalTotal": 0,
}


def extract_discount(record: Mapping[str, Any]) -> Optional[DiscountInfo]:
    """
    Build the discount for a stored order.

    Orders may carry the discount under 'discountApplied' or the older
    'discount' key. Each field prefers 'discountApplied' and falls back to
    'discount' when the first is missing or empty. An empty mapping still
    counts as a discount; values that are not mappings are ignored.
    """
    applied = record.get("discountApplied")
    legacy = record.get("discount")
    applied = applied if isinstance(applied, Mapping) else None
    legacy = legacy if isinstance(legacy, Mapping) else None
    if applied is None and legacy is None:
        return None
    applied = applied or {}
    legacy = legacy or {}

    fields = {
        key: applied.get(key) or legacy.get(key) or default
        for key, default in _DISCOUNT_DEFAULTS.items()
    }
    return DiscountInfo.model_validate(fields)


def extract_service_charges(record: Mapping[str, Any]) -> float:
    """Total service charges stored on an order, or 0."""
    raw = record.get("serviceCharges")
    if isinstance(raw, ServiceCharges):
        return raw.total_all
    if isinstance(raw, Mapping):
        return ServiceCharges.model_validate(raw).total_all
    return 0.0


def build_order_summary(record: Mapping[str, Any]) -> OrderSummary:
    """
    Recompute totals for a stored order and check them.

    Args:
        record: Stored order with 'products', 'deliveryFee', 'serviceCharges'
            and optional discount data

    Returns:
        OrderSummary with recomputed totals and the validation report
    """
    order_ref = record.get("orderNumber") or record.get("_id") or "unknown"
    items = [
        product if isinstance(product, OrderItem) else OrderItem.model_validate(product)
        for product in record.get("products") or []
    ]
    discount = extract_discount(record)

    totals = calculate_order_totals(
        items,
        record.get("deliveryFee") or 0,
        extract_service_charges(record),
        discount,
    )
    validation = validate_order_calculations(items, totals)
    if not validation.is_valid:
        logger.warning(
            f"[ORDER SUMMARY] Order calculation validation failed - "
            f"order: {order_ref}, errors: {validation.errors}"
        )
    else:
        logger.debug(
            f"[ORDER SUMMARY] Totals recomputed - order: {order_ref}, "
            f"{len(items)} items, final total: {totals.final_total}"
        )

    discount_text = None
    if discount:
        discount_text = get_discount_display_text(
            discount.discount_type, discount.discount_value, discount.code
        )

    return OrderSummary(
        items=items,
        totals=totals,
        validation=validation,
        discount_text=discount_text,
    )
