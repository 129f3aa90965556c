"""Comparable-sales valuation engine"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Tuple

from listing_analytics.domain.exceptions import InsufficientComparablesError
from listing_analytics.domain.models import (
    ComparableSale,
    Impact,
    PropertyValuation,
    SubjectProperty,
    ValuationFactor,
)
from listing_analytics.domain.policy import DEFAULT_POLICY, EnginePolicy
from listing_analytics.utils.date_utils import current_year as system_year
from listing_analytics.utils.date_utils import property_age
from listing_analytics.utils.money import mean, round_whole, to_decimal

ConfidencePolicy = Callable[[SubjectProperty, Sequence[ComparableSale]], Decimal]


@dataclass(frozen=True)
class ValuationAdjustment:
    """Multiplier applied to the running estimate when `applies` holds"""

    factor: str
    impact: Impact
    multiplier: Decimal
    weight: Decimal
    applies: Callable[[SubjectProperty, int], bool]


# Applied in order; each multiplies the running value, not the base
VALUATION_ADJUSTMENTS: Tuple[ValuationAdjustment, ...] = (
    ValuationAdjustment(
        factor="Extra bedrooms",
        impact=Impact.POSITIVE,
        multiplier=Decimal("1.05"),
        weight=Decimal("0.05"),
        applies=lambda subject, year: subject.bedrooms > 3,
    ),
    ValuationAdjustment(
        factor="Extra bathrooms",
        impact=Impact.POSITIVE,
        multiplier=Decimal("1.03"),
        weight=Decimal("0.03"),
        applies=lambda subject, year: to_decimal(subject.bathrooms) > 2,
    ),
    ValuationAdjustment(
        factor="Older property",
        impact=Impact.NEGATIVE,
        multiplier=Decimal("0.95"),
        weight=Decimal("0.05"),
        applies=lambda subject, year: property_age(subject.year_built, year) > 20,
    ),
)


def average_price_per_square_foot(comparables: Sequence[ComparableSale]) -> Decimal:
    """Mean of each comparable's own price per square foot"""
    return mean(to_decimal(sale.price) / to_decimal(sale.square_footage) for sale in comparables)


def _check_comparables(comparables: Sequence[ComparableSale]) -> None:
    if not comparables:
        raise InsufficientComparablesError("Not enough comparable sales to estimate value")

    unusable = [sale for sale in comparables if to_decimal(sale.square_footage) <= 0]
    if unusable:
        raise InsufficientComparablesError(
            f"{len(unusable)} comparable sale(s) have no usable square footage"
        )


def estimate_value(
    subject: SubjectProperty,
    comparables: Sequence[ComparableSale],
    current_year: Optional[int] = None,
    policy: EnginePolicy = DEFAULT_POLICY,
    adjustments: Sequence[ValuationAdjustment] = VALUATION_ADJUSTMENTS,
    confidence_policy: Optional[ConfidencePolicy] = None,
) -> PropertyValuation:
    """
    Estimate fair value of `subject` from comparable sales.

    Steps:
    1. Base = subject square footage * mean comparable price per square foot
    2. Apply each adjustment in order, compounding on the running value
    3. Round to whole currency units

    Confidence is the flat policy value unless a confidence_policy callable
    is supplied. Pass `current_year` for a clock-independent result.

    Raises:
        InsufficientComparablesError: no comparables, or any with square footage <= 0

    Example:
        1000 sq ft, comps at $200/sq ft, 4 bed, 3 bath, 30 years old
        200000 -> 210000 (beds) -> 216300 (baths) -> 205485 (age)
    """
    _check_comparables(comparables)

    year = current_year if current_year is not None else system_year()
    value = to_decimal(subject.square_footage) * average_price_per_square_foot(comparables)

    factors: List[ValuationFactor] = []
    for adjustment in adjustments:
        if adjustment.applies(subject, year):
            value *= adjustment.multiplier
            factors.append(
                ValuationFactor(
                    factor=adjustment.factor,
                    impact=adjustment.impact,
                    weight=adjustment.weight,
                )
            )

    confidence = (
        confidence_policy(subject, comparables)
        if confidence_policy is not None
        else policy.valuation_confidence
    )

    return PropertyValuation(
        estimated_value=round_whole(value),
        confidence=confidence,
        factors=tuple(factors),
    )
