"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from roundup_gateway.api.main import create_app
from roundup_gateway.domain.models import Category, RoundUpHolding, Transaction


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """A month of everyday card spending"""
    base_date = date(2024, 1, 1)
    amounts = ["3.47", "4.99", "8.23", "12.86", "28.33", "45.78", "15.50", "22.95", "2.75"]
    categories = [
        Category.FOOD_AND_DINING,
        Category.FOOD_AND_DINING,
        Category.FOOD_AND_DINING,
        Category.FOOD_AND_DINING,
        Category.SHOPPING,
        Category.SHOPPING,
        Category.ENTERTAINMENT,
        Category.ENTERTAINMENT,
        Category.TRANSPORTATION,
    ]

    return [
        Transaction(
            amount=Decimal(amount),
            category=category,
            date=base_date + timedelta(days=i * 3),
            merchant=f"Merchant {i}",
        )
        for i, (amount, category) in enumerate(zip(amounts, categories))
    ]


@pytest.fixture
def sample_holdings() -> list[RoundUpHolding]:
    """Round-ups invested over the first quarter of 2024"""
    return [
        RoundUpHolding(amount=Decimal("0.53"), invested_on=date(2024, 1, 5)),
        RoundUpHolding(amount=Decimal("0.77"), invested_on=date(2024, 1, 20)),
        RoundUpHolding(amount=Decimal("1.00"), invested_on=date(2024, 2, 10)),
        RoundUpHolding(amount=Decimal("0.25"), invested_on=date(2024, 3, 15)),
    ]
