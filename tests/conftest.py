"""Shared test fixtures and configuration."""
import os

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.setdefault("CURRENCY_CODE", "GBP")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from app.main import app
from app.core.config import Settings
from app.core.dependencies import get_settings
from app.services.pricing.models import (
    DiscountInfo,
    DiscountType,
    OrderItem,
    SelectedAttribute,
    SelectedAttributeItem,
)


@pytest.fixture
def test_settings():
    """Override settings for testing."""
    return Settings(
        app_name="Test Pricing Engine",
        currency_code="GBP",
        log_level="DEBUG",
    )


@pytest.fixture
def test_client(test_settings):
    """Create FastAPI test client with overrides."""
    app.dependency_overrides[get_settings] = lambda: test_settings

    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def size_attribute():
    """Single-choice size attribute with a 1.50 surcharge."""
    return SelectedAttribute(
        attribute_id="attr-size",
        attribute_name="Size",
        attribute_type="single",
        selected_items=[
            SelectedAttributeItem(
                item_id="size-large", item_name="Large", item_price=1.5, quantity=1
            )
        ],
    )


@pytest.fixture
def toppings_attribute():
    """Repeatable toppings attribute: extra cheese x2 and olives x1."""
    return SelectedAttribute(
        attribute_id="attr-toppings",
        attribute_name="Toppings",
        attribute_type="multiple-times",
        selected_items=[
            SelectedAttributeItem(
                item_id="top-cheese", item_name="Extra cheese", item_price=0.75, quantity=2
            ),
            SelectedAttributeItem(
                item_id="top-olives", item_name="Olives", item_price=0.5, quantity=1
            ),
        ],
    )


@pytest.fixture
def pizza_item(size_attribute, toppings_attribute):
    """Pizza with structured price and attributes, quantity 2."""
    return OrderItem(
        id="pizza",
        quantity=2,
        price={"base": 9, "currentEffectivePrice": 9, "attributes": 3.5, "total": 25},
        selected_attributes=[size_attribute, toppings_attribute],
    )


@pytest.fixture
def legacy_item():
    """Older cart record storing a bare unit price."""
    return OrderItem(id="fries", quantity=1, price=3.5)


@pytest.fixture
def fixed_discount():
    """Fixed 5.00 discount."""
    return DiscountInfo(
        discount_id="disc-1",
        code="SAVE5",
        name="Five off",
        discount_type=DiscountType.FIXED,
        discount_value=5,
        discount_amount=5,
        original_total=30,
    )


@pytest.fixture
def stored_order():
    """Stored order record as returned by the order service."""
    return {
        "_id": "64f0c0ffee",
        "orderNumber": "ORD-1001",
        "products": [
            {
                "id": "burger",
                "quantity": 2,
                "price": {"base": 5, "currentEffectivePrice": 5, "attributes": 1, "total": 12},
                "itemTotal": 12,
                "selectedAttributes": [
                    {
                        "attributeId": "attr-size",
                        "attributeName": "Size",
                        "attributeType": "single",
                        "selectedItems": [
                            {"itemId": "large", "itemName": "Large", "itemPrice": 1, "quantity": 1}
                        ],
                    }
                ],
                "notes": "no onions",
            }
        ],
        "deliveryFee": 2.5,
        "serviceCharges": {
            "totalMandatory": 0.5,
            "totalOptional": 0,
            "totalAll": 0.5,
            "breakdown": [
                {
                    "id": "svc-1",
                    "name": "Packaging",
                    "type": "fixed",
                    "value": 0.5,
                    "amount": 0.5,
                    "optional": False,
                }
            ],
        },
        "discountApplied": {
            "discountId": "disc-3",
            "code": "SAVE3",
            "name": "Three off",
            "discountType": "fixed",
            "discountValue": 3,
            "discountAmount": 3,
            "originalTotal": 15,
        },
    }
