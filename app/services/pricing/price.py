"""Line-item price decomposition and legacy price narrowing."""
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.services.pricing.guards import to_number

_PRICE_KEYS = ("base", "attributes", "total")
_EFFECTIVE_PRICE_KEYS = ("currentEffectivePrice", "current_effective_price")


class PriceStructure(BaseModel):
    """Decomposed unit price of a line item."""

    base: float = 0.0
    current_effective_price: float = 0.0
    attributes: float = 0.0
    total: float = 0.0

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)


def _has_field(price: Any, key: str) -> bool:
    if isinstance(price, Mapping):
        return key in price
    return hasattr(price, key)


def is_price_object(price: Any) -> bool:
    """
    Check whether a price carries the structured decomposition.

    Older cart records store a bare unit price; newer ones store a
    PriceStructure, its mapping form, or any object exposing the four
    fields as attributes. Only presence is checked.
    """
    if isinstance(price, PriceStructure):
        return True
    if price is None or isinstance(price, (bool, int, float, str)):
        return False
    return all(_has_field(price, key) for key in _PRICE_KEYS) and any(
        _has_field(price, key) for key in _EFFECTIVE_PRICE_KEYS
    )


def base_price_of(price: Any) -> float:
    """Resolve the undiscounted unit price from either price shape."""
    if isinstance(price, PriceStructure):
        return price.base
    if is_price_object(price):
        base = price["base"] if isinstance(price, Mapping) else price.base
        return to_number(base)
    return to_number(price)
