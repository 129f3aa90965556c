"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import List, Optional

# Request size bounds; the engine itself accepts any length
MAX_LOAN_TERM_YEARS = 50
MAX_SERIES_LENGTH = 500
MAX_COMPARABLES = 200


class MortgageRequest(BaseModel):
    """Request body for POST /v1/mortgage/calculate"""

    purchase_price: Decimal = Field(..., ge=0, description="Purchase price")
    down_payment: Decimal = Field(..., ge=0, description="Down payment")
    interest_rate: Optional[Decimal] = Field(
        None, ge=0, le=1, description="Annual rate as a fraction (0.065 = 6.5%)"
    )
    loan_term_years: Optional[int] = Field(None, gt=0, le=MAX_LOAN_TERM_YEARS, description="Loan term in years")
    include_schedule: bool = False


class AmortizationPaymentSchema(BaseModel):
    """Single month in an amortization schedule"""

    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


class MortgageResponse(BaseModel):
    """Response for POST /v1/mortgage/calculate"""

    purchase_price: Decimal
    down_payment: Decimal
    loan_amount: Decimal
    interest_rate: Decimal
    loan_term_years: int
    monthly_payment: Decimal
    closing_costs: Decimal
    total_cost: Decimal
    minimum_down_payment: Decimal
    meets_minimum_down_payment: bool
    schedule: Optional[List[AmortizationPaymentSchema]] = None


class MarketDataPointSchema(BaseModel):
    """Single historical sale in a trend series"""

    price: Decimal = Field(..., gt=0)
    days_on_market: int = Field(..., ge=0)
    date: date


class MarketTrendRequest(BaseModel):
    """Request body for POST /v1/market/trend"""

    area: Optional[str] = Field(None, description="Market area label, echoed back")
    property_type: Optional[str] = Field(None, description="Property type label, echoed back")
    series: List[MarketDataPointSchema] = Field(..., max_length=MAX_SERIES_LENGTH)
    assumed_average_square_footage: Optional[Decimal] = Field(None, gt=0)


class MarketTrendResponse(BaseModel):
    """Response for POST /v1/market/trend"""

    area: Optional[str] = None
    property_type: Optional[str] = None
    median_price: Decimal
    average_days_on_market: Decimal
    price_per_square_foot: Decimal
    inventory_count: int
    trend: str


class SubjectPropertySchema(BaseModel):
    """Property being valued"""

    square_footage: Decimal = Field(..., gt=0)
    bedrooms: int = Field(..., ge=0)
    bathrooms: Decimal = Field(..., ge=0)
    year_built: int
    lot_size: Decimal = Field(Decimal("0"), ge=0)


class ComparableSaleSchema(BaseModel):
    """Comparable sale with full property attributes"""

    price: Decimal = Field(..., gt=0)
    square_footage: Decimal
    bedrooms: int = Field(0, ge=0)
    bathrooms: Decimal = Field(Decimal("0"), ge=0)
    year_built: int
    lot_size: Decimal = Field(Decimal("0"), ge=0)
    date: date


class ValuationRequest(BaseModel):
    """Request body for POST /v1/valuation/estimate"""

    subject: SubjectPropertySchema
    comparables: List[ComparableSaleSchema] = Field(..., max_length=MAX_COMPARABLES)
    current_year: Optional[int] = Field(None, description="Reference year for property age")


class ValuationFactorSchema(BaseModel):
    """Adjustment applied to an estimate"""

    factor: str
    impact: str
    weight: Decimal


class ValuationResponse(BaseModel):
    """Response for POST /v1/valuation/estimate"""

    estimated_value: Decimal
    confidence: Decimal
    factors: List[ValuationFactorSchema]


class SalePriceSchema(BaseModel):
    """Comparable sale price and closing date"""

    price: Decimal = Field(..., ge=0)
    date: date


class NegotiationRequest(BaseModel):
    """Request body for POST /v1/negotiation/suggest-counter"""

    listing_price: Decimal = Field(..., ge=0)
    offer_amount: Decimal = Field(..., ge=0)
    comparable_sales: List[SalePriceSchema] = Field(..., max_length=MAX_COMPARABLES)
    days_on_market: int = Field(..., ge=0)


class NegotiationResponse(BaseModel):
    """Response for POST /v1/negotiation/suggest-counter"""

    type: str
    reasoning: str
    suggested_amount: Optional[Decimal] = None
    confidence: Decimal
