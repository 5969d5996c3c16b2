"""Pricing models."""
from collections.abc import Mapping
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.services.pricing.guards import to_number
from app.services.pricing.price import PriceStructure, is_price_object


def _number_or_zero(value: Any) -> float:
    return to_number(value)


def _quantity_or_zero(value: Any) -> Union[int, float]:
    # Clamped to 1 when priced, still reported by validation
    return to_number(value) or 0


class PricingModel(BaseModel):
    """Base model accepting both camelCase wire keys and field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AttributeType(str, Enum):
    """How many items may be chosen from an attribute group."""

    SINGLE = "single"
    MULTIPLE = "multiple"
    MULTIPLE_TIMES = "multiple-times"


class DiscountType(str, Enum):
    """Discount display type."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


class SelectedAttributeItem(PricingModel):
    """One chosen option, e.g. extra cheese x2."""

    item_id: Optional[str] = None
    item_name: Optional[str] = None
    item_price: float = 0.0  # per-unit surcharge
    quantity: Union[int, float] = 1

    _coerce_price = field_validator("item_price", mode="before")(_number_or_zero)
    _coerce_quantity = field_validator("quantity", mode="before")(_quantity_or_zero)


class SelectedAttribute(PricingModel):
    """An attribute group together with the chosen items."""

    attribute_id: Optional[str] = None
    attribute_name: Optional[str] = None
    # Unknown types from older catalogs are kept as plain strings
    attribute_type: Union[AttributeType, str] = AttributeType.SINGLE
    selected_items: List[SelectedAttributeItem] = []


class OrderItem(PricingModel):
    """Cart line item."""

    id: Optional[Union[str, int]] = None
    quantity: Union[int, float] = 1
    price: Any = 0
    item_total: Optional[float] = None
    selected_attributes: Optional[List[SelectedAttribute]] = None
    notes: Optional[str] = None

    _coerce_quantity = field_validator("quantity", mode="before")(_quantity_or_zero)

    @field_validator("item_total", mode="before")
    @classmethod
    def _declared_total(cls, value: Any) -> Optional[float]:
        # A malformed declared total is ignored so the computed one applies
        if value is None or to_number(value) != value:
            return None
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _narrow_price(cls, value: Any) -> Any:
        if is_price_object(value) and not isinstance(value, PriceStructure):
            return PriceStructure.model_validate(
                value, from_attributes=not isinstance(value, Mapping)
            )
        return value


class DiscountInfo(PricingModel):
    """Applied discount; discount_amount is the precomputed amount to subtract."""

    discount_id: str = ""
    code: str = ""
    name: str = ""
    discount_type: DiscountType = DiscountType.FIXED
    discount_value: float = 0.0
    discount_amount: float = 0.0
    original_total: float = 0.0

    _coerce_numbers = field_validator(
        "discount_value", "discount_amount", "original_total", mode="before"
    )(_number_or_zero)


class OrderTotals(PricingModel):
    """Computed order totals."""

    subtotal: float = 0.0
    attributes_total: float = 0.0
    delivery_fee: float = 0.0
    service_charges: float = 0.0
    discount_amount: float = 0.0
    final_total: float = 0.0
    savings: float = 0.0


class ValidationReport(PricingModel):
    """Result of checking computed totals against the pricing invariants."""

    is_valid: bool
    errors: List[str] = []


class ServiceChargeLine(PricingModel):
    """A single service charge on a stored order."""

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    value: float = 0.0
    amount: float = 0.0
    optional: bool = False

    _coerce_numbers = field_validator("value", "amount", mode="before")(_number_or_zero)


class ServiceCharges(PricingModel):
    """Service charge totals as stored on an order."""

    total_mandatory: float = 0.0
    total_optional: float = 0.0
    total_all: float = 0.0
    breakdown: List[ServiceChargeLine] = []

    _coerce_numbers = field_validator(
        "total_mandatory", "total_optional", "total_all", mode="before"
    )(_number_or_zero)


class OrderSummary(PricingModel):
    """Recomputed totals and validation for a stored order."""

    items: List[OrderItem] = []
    totals: OrderTotals
    validation: ValidationReport
    discount_text: Optional[str] = None
