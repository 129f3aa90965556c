"""Market trend analysis over historical comparable-sale prices"""

from decimal import Decimal
from typing import List, Optional, Sequence

from listing_analytics.domain.exceptions import InsufficientDataError, InvalidInputError
from listing_analytics.domain.models import MarketDataPoint, MarketSnapshot, Trend
from listing_analytics.domain.policy import DEFAULT_POLICY, EnginePolicy
from listing_analytics.utils.money import Number, mean, round_cents, to_decimal

MIN_SERIES_LENGTH = 2


def median_price(prices: Sequence[Decimal]) -> Decimal:
    """
    Median of a non-empty price list.

    For an even count the lower-middle element is returned, so the result is
    always an observed sale price: [100, 200, 300, 400] -> 200.
    """
    if not prices:
        raise InsufficientDataError("Cannot take the median of an empty price list")

    ordered = sorted(prices)
    return ordered[(len(ordered) - 1) // 2]


def classify_trend(
    prices: Sequence[Decimal],
    policy: EnginePolicy = DEFAULT_POLICY,
) -> Trend:
    """
    Compare the recent window average against everything before it.

    Windows:
    - recent: last `trend_window_size` prices (6 by default)
    - older:  all preceding prices

    Moves inside the +/- trend_band (5%) are treated as noise. With no older
    window there is nothing to compare against, so the trend is stable.
    """
    window = policy.trend_window_size
    recent = prices[-window:]
    older = prices[:-window] if len(prices) > window else []

    if not older:
        return Trend.STABLE

    recent_avg = mean(recent)
    older_avg = mean(older)

    if recent_avg > older_avg * (1 + policy.trend_band):
        return Trend.RISING
    if recent_avg < older_avg * (1 - policy.trend_band):
        return Trend.FALLING
    return Trend.STABLE


def analyze_market_trend(
    series: Sequence[MarketDataPoint],
    assumed_average_square_footage: Optional[Number] = None,
    policy: EnginePolicy = DEFAULT_POLICY,
) -> MarketSnapshot:
    """
    Summarize a historical sale series into a MarketSnapshot.

    Points are ordered by sale date before windowing. Price per square foot
    divides the median by an assumed average home size, since the series
    carries no square footage of its own.

    Raises:
        InsufficientDataError: fewer than 2 points
        InvalidInputError: non-positive assumed square footage
    """
    if len(series) < MIN_SERIES_LENGTH:
        raise InsufficientDataError(
            f"At least {MIN_SERIES_LENGTH} sales are required to classify a trend, got {len(series)}"
        )

    divisor = (
        to_decimal(assumed_average_square_footage)
        if assumed_average_square_footage is not None
        else policy.assumed_average_square_footage
    )
    if divisor <= 0:
        raise InvalidInputError(f"Assumed average square footage must be positive, got {divisor}")

    ordered: List[MarketDataPoint] = sorted(series, key=lambda p: p.date)
    prices = [to_decimal(p.price) for p in ordered]

    median = median_price(prices)
    average_dom = mean(Decimal(p.days_on_market) for p in ordered)

    return MarketSnapshot(
        median_price=median,
        average_days_on_market=round_cents(average_dom),
        price_per_square_foot=round_cents(median / divisor),
        inventory_count=len(ordered),
        trend=classify_trend(prices, policy),
    )
