"""Domain models - immutable value objects passed through the analytics engine"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple


class Trend(str, Enum):
    """Direction of recent sale prices"""

    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class Impact(str, Enum):
    """Effect of a valuation factor on the estimate"""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class SuggestionType(str, Enum):
    """Negotiation posture recommended to the seller"""

    COUNTER_OFFER = "counter_offer"
    ACCEPT = "accept"
    REJECT = "reject"
    WAIT = "wait"


@dataclass(frozen=True)
class LoanTerms:
    """Fixed-rate loan parameters"""

    loan_amount: Decimal
    annual_interest_rate: Decimal  # fraction, 0.065 not 6.5
    term_months: int


@dataclass(frozen=True)
class CostBreakdown:
    """Full transaction cost summary for a purchase"""

    purchase_price: Decimal
    down_payment: Decimal
    loan_amount: Decimal
    interest_rate: Decimal
    loan_term_years: int
    monthly_payment: Decimal
    closing_costs: Decimal
    total_cost: Decimal


@dataclass(frozen=True)
class AmortizationPayment:
    """Single monthly payment in an amortization schedule"""

    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class ComparableSale:
    """Recently sold property used as a pricing reference"""

    price: Decimal
    square_footage: Decimal
    bedrooms: int
    bathrooms: Decimal
    year_built: int
    lot_size: Decimal
    date: date


@dataclass(frozen=True)
class SubjectProperty:
    """Property being valued"""

    square_footage: Decimal
    bedrooms: int
    bathrooms: Decimal
    year_built: int
    lot_size: Decimal


@dataclass(frozen=True)
class ValuationFactor:
    """Adjustment that was applied to a valuation"""

    factor: str
    impact: Impact
    weight: Decimal


@dataclass(frozen=True)
class PropertyValuation:
    """Estimated fair value of a subject property"""

    estimated_value: Decimal
    confidence: Decimal
    factors: Tuple[ValuationFactor, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MarketDataPoint:
    """Historical sale in a market trend series"""

    price: Decimal
    days_on_market: int
    date: date


@dataclass(frozen=True)
class MarketSnapshot:
    """Summary statistics and trend for a market area"""

    median_price: Decimal
    average_days_on_market: Decimal
    price_per_square_foot: Decimal
    inventory_count: int
    trend: Trend


@dataclass(frozen=True)
class SalePrice:
    """Minimal comparable sale record: price and closing date"""

    price: Decimal
    date: date


@dataclass(frozen=True)
class NegotiationSuggestion:
    """Recommended response to an offer"""

    type: SuggestionType
    reasoning: str
    confidence: Decimal
    suggested_amount: Optional[Decimal] = None
