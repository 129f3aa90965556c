"""Negotiation advisor - ordered rule table over offer and market signals"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Sequence, Union

from listing_analytics.domain.exceptions import (
    InsufficientComparablesError,
    InvalidInputError,
    NoMatchingRuleError,
)
from listing_analytics.domain.models import (
    ComparableSale,
    NegotiationSuggestion,
    SalePrice,
    SuggestionType,
)
from listing_analytics.domain.policy import DEFAULT_POLICY, EnginePolicy
from listing_analytics.utils.money import Number, mean, round_whole, to_decimal


@dataclass(frozen=True)
class OfferContext:
    """Signals the negotiation rules are evaluated against"""

    listing_price: Decimal
    offer_amount: Decimal
    average_comparable_price: Decimal
    days_on_market: int

    @property
    def market_difference(self) -> Decimal:
        """Offer minus average comparable price (negative = below market)"""
        return self.offer_amount - self.average_comparable_price

    @property
    def price_difference(self) -> Decimal:
        """Offer minus listing price (positive = above asking)"""
        return self.offer_amount - self.listing_price


@dataclass(frozen=True)
class NegotiationRule:
    """Guarded outcome: `build` runs only when `applies` holds"""

    name: str
    applies: Callable[[OfferContext, EnginePolicy], bool]
    build: Callable[[OfferContext, EnginePolicy], NegotiationSuggestion]


def _counter_below_market(ctx: OfferContext, policy: EnginePolicy) -> NegotiationSuggestion:
    return NegotiationSuggestion(
        type=SuggestionType.COUNTER_OFFER,
        reasoning=(
            "Market data suggests the property is overpriced relative to market "
            "and has been on the market for an extended time"
        ),
        suggested_amount=round_whole(ctx.average_comparable_price * policy.market_counter_ratio),
        confidence=policy.market_counter_confidence,
    )


def _accept_above_asking(ctx: OfferContext, policy: EnginePolicy) -> NegotiationSuggestion:
    return NegotiationSuggestion(
        type=SuggestionType.ACCEPT,
        reasoning="Offer exceeds the listing price but remains below market value",
        confidence=policy.accept_confidence,
    )


def _counter_from_listing(ctx: OfferContext, policy: EnginePolicy) -> NegotiationSuggestion:
    return NegotiationSuggestion(
        type=SuggestionType.COUNTER_OFFER,
        reasoning="Default counter-offer based on the listing price",
        suggested_amount=round_whole(ctx.listing_price * policy.listing_counter_ratio),
        confidence=policy.default_counter_confidence,
    )


# Evaluated top to bottom; first match wins
NEGOTIATION_RULES: Sequence[NegotiationRule] = (
    NegotiationRule(
        name="below_market_stale_listing",
        applies=lambda ctx, policy: (
            ctx.market_difference < 0 and ctx.days_on_market > policy.extended_listing_days
        ),
        build=_counter_below_market,
    ),
    NegotiationRule(
        name="above_asking_below_market",
        applies=lambda ctx, policy: ctx.price_difference > 0 and ctx.market_difference < 0,
        build=_accept_above_asking,
    ),
    NegotiationRule(
        name="default_counter",
        applies=lambda ctx, policy: True,
        build=_counter_from_listing,
    ),
)


def build_offer_context(
    listing_price: Number,
    offer_amount: Number,
    comparable_sales: Sequence[Union[SalePrice, ComparableSale]],
    days_on_market: int,
) -> OfferContext:
    """
    Validate inputs and derive the signals the rules need.

    Raises:
        InsufficientComparablesError: no comparable sales
        InvalidInputError: negative price, offer, comparable price or days on market
    """
    if not comparable_sales:
        raise InsufficientComparablesError(
            "Not enough comparable sales to suggest a negotiation strategy"
        )

    listing = to_decimal(listing_price)
    offer = to_decimal(offer_amount)
    prices = [to_decimal(sale.price) for sale in comparable_sales]

    if listing < 0:
        raise InvalidInputError(f"Listing price must be non-negative, got {listing}")
    if offer < 0:
        raise InvalidInputError(f"Offer amount must be non-negative, got {offer}")
    if any(price < 0 for price in prices):
        raise InvalidInputError("Comparable sale prices must be non-negative")
    if days_on_market < 0:
        raise InvalidInputError(f"Days on market must be non-negative, got {days_on_market}")

    return OfferContext(
        listing_price=listing,
        offer_amount=offer,
        average_comparable_price=mean(prices),
        days_on_market=days_on_market,
    )


def suggest_strategy(
    listing_price: Number,
    offer_amount: Number,
    comparable_sales: Sequence[Union[SalePrice, ComparableSale]],
    days_on_market: int,
    policy: EnginePolicy = DEFAULT_POLICY,
    rules: Optional[Sequence[NegotiationRule]] = None,
) -> NegotiationSuggestion:
    """
    Recommend how the seller should respond to an offer.

    Default rule table (first match wins):
    1. Offer below market AND listed > 30 days -> counter at 95% of market average
    2. Offer above asking AND below market     -> accept
    3. Otherwise                               -> counter at 98% of listing price

    Raises:
        InsufficientComparablesError: no comparable sales
        InvalidInputError: negative inputs
        NoMatchingRuleError: a custom rule table matched nothing
    """
    ctx = build_offer_context(listing_price, offer_amount, comparable_sales, days_on_market)

    table = NEGOTIATION_RULES if rules is None else rules

    for rule in table:
        if rule.applies(ctx, policy):
            return rule.build(ctx, policy)

    raise NoMatchingRuleError("No negotiation rule matched the offer")
