"""Pricing API endpoints."""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from app.services.pricing.calculator import calculate_item_total, calculate_order_totals
from app.services.pricing.formatting import format_discount_text
from app.services.pricing.models import (
    DiscountInfo,
    OrderItem,
    OrderSummary,
    OrderTotals,
    PricingModel,
    ValidationReport,
)
from app.services.pricing.summary import build_order_summary
from app.services.pricing.validator import validate_order_calculations


router = APIRouter()
logger = logging.getLogger(__name__)


class TotalsRequest(PricingModel):
    """Order totals request model."""
    items: List[OrderItem] = []
    delivery_fee: float = 0
    service_charges: float = 0
    discount: Optional[DiscountInfo] = None


class ValidateRequest(PricingModel):
    """Totals validation request model."""
    items: List[OrderItem] = []
    totals: OrderTotals


class ItemTotalResponse(PricingModel):
    """Item total response model."""
    item_total: float


class DiscountTextResponse(PricingModel):
    """Discount text response model."""
    text: str


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@router.post("/api/pricing/totals", response_model=OrderTotals)
async def get_order_totals(request: Request, body: TotalsRequest):
    """Calculate order totals for a cart."""
    logger.info(
        f"[PRICING] Totals requested - {len(body.items)} items, "
        f"Client: {_client_host(request)}"
    )
    return calculate_order_totals(
        body.items, body.delivery_fee, body.service_charges, body.discount
    )


@router.post("/api/pricing/validate", response_model=ValidationReport)
async def validate_totals(request: Request, body: ValidateRequest):
    """Check totals against the pricing invariants."""
    report = validate_order_calculations(body.items, body.totals)
    logger.info(
        f"[PRICING] Validation requested - valid: {report.is_valid}, "
        f"errors: {len(report.errors)}, Client: {_client_host(request)}"
    )
    return report


@router.post("/api/pricing/items/total", response_model=ItemTotalResponse)
async def get_item_total(item: OrderItem):
    """Calculate a single line item total."""
    return ItemTotalResponse(item_total=calculate_item_total(item))


@router.post("/api/pricing/discount-text", response_model=DiscountTextResponse)
async def get_discount_text(discount: DiscountInfo):
    """Render display text for a discount."""
    return DiscountTextResponse(text=format_discount_text(discount))


@router.post("/api/pricing/summary", response_model=OrderSummary)
async def get_order_summary(request: Request, record: Dict[str, Any]):
    """Recompute and validate totals for a stored order record."""
    order_ref = record.get("orderNumber") or record.get("_id") or "unknown"
    logger.info(
        f"[ORDER SUMMARY] Request received - order: {order_ref}, "
        f"Client: {_client_host(request)}"
    )

    try:
        return build_order_summary(record)

    except ValidationError as e:
        logger.warning(f"[ORDER SUMMARY] Malformed order record - order: {order_ref}, Error: {e}")
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    except Exception as e:
        logger.error(
            f"[ORDER SUMMARY] Error building summary - order: {order_ref}, "
            f"Error: {type(e).__name__}: {str(e)}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Error building order summary: {str(e)}")
