"""Presentational currency and discount formatting."""
import math
from typing import Optional, Union

from app.core.config import settings
from app.services.pricing.guards import non_negative
from app.services.pricing.models import DiscountInfo, DiscountType

CURRENCY_SYMBOLS = {
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
    "INR": "₹",
}


def format_currency(amount: float, currency_code: Optional[str] = None) -> str:
    """Format an amount with the configured currency, e.g. £1,234.50."""
    code = (currency_code or settings.currency_code).upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def safe_format_currency(amount: Optional[float]) -> str:
    """Format an amount for display, showing missing or negative values as zero."""
    if amount is None or (isinstance(amount, float) and math.isnan(amount)):
        return format_currency(0)
    return format_currency(non_negative(amount))


def _format_percentage(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def get_discount_display_text(
    discount_type: Union[DiscountType, str],
    discount_value: float,
    code: Optional[str] = None,
) -> str:
    """Discount text such as '10% off' or '£5.00 off (SAVE5)'."""
    if discount_type == DiscountType.PERCENTAGE:
        text = f"{_format_percentage(discount_value)}% off"
    else:
        text = f"{format_currency(discount_value)} off"
    return f"{text} ({code})" if code else text


def format_discount_text(discount: DiscountInfo) -> str:
    """Discount text for a DiscountInfo, without the code."""
    return get_discount_display_text(discount.discount_type, discount.discount_value)
