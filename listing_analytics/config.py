"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from listing_analytics.domain.policy import EnginePolicy


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "listing-analytics"
    log_level: str = "INFO"

    # Cost breakdown
    closing_cost_rate: Decimal = Field(Decimal("0.03"), ge=0, le=1)
    default_interest_rate: Decimal = Field(Decimal("0.065"), ge=0, le=1)
    default_loan_term_years: int = Field(30, gt=0)
    min_down_payment_rate: Decimal = Field(Decimal("0.05"), ge=0, le=1)

    # Market trend
    trend_window_size: int = Field(6, gt=0)
    trend_band: Decimal = Field(Decimal("0.05"), ge=0, le=1)
    assumed_average_square_footage: Decimal = Field(Decimal("1500"), gt=0)

    # Valuation
    valuation_confidence: Decimal = Field(Decimal("0.75"), ge=0, le=1)

    # Negotiation
    extended_listing_days: int = Field(30, ge=0)
    market_counter_ratio: Decimal = Field(Decimal("0.95"), gt=0)
    listing_counter_ratio: Decimal = Field(Decimal("0.98"), gt=0)
    market_counter_confidence: Decimal = Field(Decimal("0.8"), ge=0, le=1)
    accept_confidence: Decimal = Field(Decimal("0.9"), ge=0, le=1)
    default_counter_confidence: Decimal = Field(Decimal("0.6"), ge=0, le=1)

    def to_policy(self) -> EnginePolicy:
        """Build the engine policy from the configured tunables"""
        return EnginePolicy(
            closing_cost_rate=self.closing_cost_rate,
            default_interest_rate=self.default_interest_rate,
            default_loan_term_years=self.default_loan_term_years,
            min_down_payment_rate=self.min_down_payment_rate,
            trend_window_size=self.trend_window_size,
            trend_band=self.trend_band,
            assumed_average_square_footage=self.assumed_average_square_footage,
            valuation_confidence=self.valuation_confidence,
            extended_listing_days=self.extended_listing_days,
            market_counter_ratio=self.market_counter_ratio,
            listing_counter_ratio=self.listing_counter_ratio,
            market_counter_confidence=self.market_counter_confidence,
            accept_confidence=self.accept_confidence,
            default_counter_confidence=self.default_counter_confidence,
        )


settings = Settings()
