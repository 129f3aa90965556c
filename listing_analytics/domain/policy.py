"""Tunable constants for the analytics engine"""

from dataclasses import dataclass
from decimal import Decimal

from listing_analytics.domain.exceptions import InvalidInputError


@dataclass(frozen=True)
class EnginePolicy:
    """
    Named, overridable constants used by the pricing rules.

    Defaults reproduce the marketplace's production behavior. Build a custom
    instance (or use Settings.to_policy()) to tune them per deployment.
    """

    # Cost breakdown
    closing_cost_rate: Decimal = Decimal("0.03")
    default_interest_rate: Decimal = Decimal("0.065")
    default_loan_term_years: int = 30
    min_down_payment_rate: Decimal = Decimal("0.05")

    # Market trend
    trend_window_size: int = 6
    trend_band: Decimal = Decimal("0.05")  # +/-5% noise threshold
    assumed_average_square_footage: Decimal = Decimal("1500")

    # Valuation
    valuation_confidence: Decimal = Decimal("0.75")

    # Negotiation
    extended_listing_days: int = 30
    market_counter_ratio: Decimal = Decimal("0.95")
    listing_counter_ratio: Decimal = Decimal("0.98")
    market_counter_confidence: Decimal = Decimal("0.8")
    accept_confidence: Decimal = Decimal("0.9")
    default_counter_confidence: Decimal = Decimal("0.6")

    def __post_init__(self) -> None:
        fractions = {
            "closing_cost_rate": self.closing_cost_rate,
            "default_interest_rate": self.default_interest_rate,
            "min_down_payment_rate": self.min_down_payment_rate,
            "trend_band": self.trend_band,
            "valuation_confidence": self.valuation_confidence,
            "market_counter_confidence": self.market_counter_confidence,
            "accept_confidence": self.accept_confidence,
            "default_counter_confidence": self.default_counter_confidence,
        }
        for name, value in fractions.items():
            if not 0 <= value <= 1:
                raise InvalidInputError(f"{name} must be a fraction between 0 and 1, got {value}")

        positives = {
            "default_loan_term_years": self.default_loan_term_years,
            "trend_window_size": self.trend_window_size,
            "assumed_average_square_footage": self.assumed_average_square_footage,
            "market_counter_ratio": self.market_counter_ratio,
            "listing_counter_ratio": self.listing_counter_ratio,
        }
        for name, value in positives.items():
            if value <= 0:
                raise InvalidInputError(f"{name} must be positive, got {value}")

        if self.extended_listing_days < 0:
            raise InvalidInputError(
                f"extended_listing_days must be non-negative, got {self.extended_listing_days}"
            )


DEFAULT_POLICY = EnginePolicy()
