"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from fastapi.testclient import TestClient
from listing_analytics.api.main import create_app
from listing_analytics.domain.models import ComparableSale, MarketDataPoint, SubjectProperty


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_comparables() -> list[ComparableSale]:
    """Three nearby sales, each at exactly $200 per square foot"""
    base_date = date(2025, 3, 1)
    return [
        ComparableSale(
            price=Decimal("400000"),
            square_footage=Decimal("2000"),
            bedrooms=3,
            bathrooms=Decimal("2"),
            year_built=2001,
            lot_size=Decimal("5000"),
            date=base_date,
        ),
        ComparableSale(
            price=Decimal("300000"),
            square_footage=Decimal("1500"),
            bedrooms=3,
            bathrooms=Decimal("1.5"),
            year_built=1990,
            lot_size=Decimal("4200"),
            date=base_date + timedelta(days=21),
        ),
        ComparableSale(
            price=Decimal("500000"),
            square_footage=Decimal("2500"),
            bedrooms=4,
            bathrooms=Decimal("3"),
            year_built=2012,
            lot_size=Decimal("6100"),
            date=base_date + timedelta(days=45),
        ),
    ]


@pytest.fixture
def sample_subject() -> SubjectProperty:
    """1000 sq ft home that triggers every valuation adjustment in 2025"""
    return SubjectProperty(
        square_footage=Decimal("1000"),
        bedrooms=4,
        bathrooms=Decimal("3"),
        year_built=1995,
        lot_size=Decimal("4000"),
    )


def make_series(prices: list[int], start: date = date(2024, 1, 1), days_on_market: int = 20) -> list[MarketDataPoint]:
    """Monthly sale series with the given prices, oldest first"""
    return [
        MarketDataPoint(
            price=Decimal(price),
            days_on_market=days_on_market,
            date=start + timedelta(days=30 * i),
        )
        for i, price in enumerate(prices)
    ]


@pytest.fixture
def rising_series() -> list[MarketDataPoint]:
    """Twelve months: six at $300k then six at $330k (+10%)"""
    return make_series([300000] * 6 + [330000] * 6)


@pytest.fixture
def series_factory():
    """Build a monthly MarketDataPoint series from a list of prices"""
    return make_series
