"""Mortgage payment math and transaction cost breakdowns"""

from decimal import Decimal, localcontext
from typing import List, Optional

from listing_analytics.domain.exceptions import InvalidInputError
from listing_analytics.domain.models import AmortizationPayment, CostBreakdown, LoanTerms
from listing_analytics.domain.policy import DEFAULT_POLICY, EnginePolicy
from listing_analytics.utils.money import Number, round_cents, to_decimal

ZERO = Decimal("0")
ONE = Decimal("1")
MONTHS_PER_YEAR = 12
PAYMENT_PRECISION = 50


def _validate_loan(loan_amount: Decimal, annual_interest_rate: Decimal, term_months: int) -> None:
    if loan_amount < 0:
        raise InvalidInputError(f"Loan amount must be non-negative, got {loan_amount}")
    if term_months <= 0:
        raise InvalidInputError(f"Loan term must be a positive number of months, got {term_months}")
    if not ZERO <= annual_interest_rate <= ONE:
        raise InvalidInputError(
            f"Annual interest rate must be a fraction between 0 and 1, got {annual_interest_rate}"
        )


def compute_monthly_payment(
    loan_amount: Number,
    annual_interest_rate: Number,
    term_months: int,
) -> Decimal:
    """
    Fixed-rate monthly payment, rounded half-up to the cent.

    Formula:
        M = P * r * (1 + r)^n / ((1 + r)^n - 1),  r = annual rate / 12

    A zero rate, or one too small to register in (1 + r), is handled as the
    limiting case P / n.

    Raises:
        InvalidInputError: negative loan amount, non-positive term or rate outside [0, 1]

    Example:
        $300,000 at 6.5% over 360 months -> $1,896.20
    """
    principal = to_decimal(loan_amount)
    rate = to_decimal(annual_interest_rate)
    _validate_loan(principal, rate, term_months)

    if rate == 0:
        return round_cents(principal / term_months)

    with localcontext() as ctx:
        ctx.prec = PAYMENT_PRECISION
        base = ONE + rate / MONTHS_PER_YEAR
        # Use the rate that survived in (1 + r) so numerator and denominator agree
        monthly_rate = base - ONE
        if monthly_rate == 0:
            return round_cents(principal / term_months)

        growth = base ** term_months
        payment = principal * monthly_rate * growth / (growth - ONE)
    return round_cents(payment)


def monthly_payment_for(terms: LoanTerms) -> Decimal:
    """Monthly payment for a LoanTerms value"""
    return compute_monthly_payment(terms.loan_amount, terms.annual_interest_rate, terms.term_months)


def generate_amortization_schedule(
    loan_amount: Number,
    annual_interest_rate: Number,
    term_months: int,
) -> List[AmortizationPayment]:
    """
    Month-by-month split of each payment into interest and principal.

    Requirements:
    - Interest for a period is the outstanding balance times the monthly rate, to the cent
    - Last payment absorbs rounding drift so the balance ends at exactly zero

    Returns:
        One AmortizationPayment per month; empty for a zero loan amount
    """
    principal = to_decimal(loan_amount)
    rate = to_decimal(annual_interest_rate)
    payment = compute_monthly_payment(principal, rate, term_months)

    if principal == 0:
        return []

    monthly_rate = rate / MONTHS_PER_YEAR
    balance = principal
    schedule = []

    for period in range(1, term_months + 1):
        interest = round_cents(balance * monthly_rate)
        principal_paid = payment - interest

        # Last payment (or an early payoff) clears whatever remains
        if period == term_months or principal_paid > balance:
            principal_paid = balance

        balance -= principal_paid
        schedule.append(
            AmortizationPayment(
                period=period,
                payment=interest + principal_paid,
                principal=principal_paid,
                interest=interest,
                balance=balance,
            )
        )

        if balance == 0:
            break

    return schedule


def minimum_down_payment(purchase_price: Number, policy: EnginePolicy = DEFAULT_POLICY) -> Decimal:
    """Smallest down payment lenders accept (5% of price by default)"""
    return round_cents(to_decimal(purchase_price) * policy.min_down_payment_rate)


def build_cost_breakdown(
    purchase_price: Number,
    down_payment: Number,
    interest_rate: Optional[Number] = None,
    loan_term_years: Optional[int] = None,
    policy: EnginePolicy = DEFAULT_POLICY,
) -> CostBreakdown:
    """
    Combine price, down payment, rate and term into a transaction cost summary.

    Closing costs are estimated as a flat share of the purchase price
    (policy.closing_cost_rate, 3% by default) and are not rounded, so
    total_cost == purchase_price * (1 + closing_cost_rate) exactly.

    Raises:
        InvalidInputError: down payment outside [0, purchase_price] or invalid loan terms
    """
    price = to_decimal(purchase_price)
    down = to_decimal(down_payment)
    rate = to_decimal(interest_rate) if interest_rate is not None else policy.default_interest_rate
    term_years = loan_term_years if loan_term_years is not None else policy.default_loan_term_years

    if price < 0:
        raise InvalidInputError(f"Purchase price must be non-negative, got {price}")
    if down < 0 or down > price:
        raise InvalidInputError(
            f"Down payment must be between 0 and the purchase price ({price}), got {down}"
        )

    terms = LoanTerms(
        loan_amount=price - down,
        annual_interest_rate=rate,
        term_months=term_years * MONTHS_PER_YEAR,
    )
    monthly_payment = monthly_payment_for(terms)

    closing_costs = price * policy.closing_cost_rate

    return CostBreakdown(
        purchase_price=price,
        down_payment=down,
        loan_amount=terms.loan_amount,
        interest_rate=rate,
        loan_term_years=term_years,
        monthly_payment=monthly_payment,
        closing_costs=closing_costs,
        total_cost=price + closing_costs,
    )
