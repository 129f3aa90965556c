"""Unit tests for mortgage payments, schedules and cost breakdowns"""

import pytest
from decimal import Decimal
from listing_analytics.domain.amortization import (
    build_cost_breakdown,
    compute_monthly_payment,
    generate_amortization_schedule,
    minimum_down_payment,
    monthly_payment_for,
)
from listing_analytics.domain.exceptions import InvalidInputError
from listing_analytics.domain.models import LoanTerms
from listing_analytics.domain.policy import EnginePolicy


def test_compute_monthly_payment_standard_mortgage():
    """Test 30-year fixed at 6.5% on $300k"""
    payment = compute_monthly_payment(Decimal("300000"), Decimal("0.065"), 360)
    assert payment == Decimal("1896.20")


def test_compute_monthly_payment_rounds_to_cents():
    """Test result always carries exactly two decimal places"""
    payment = compute_monthly_payment(Decimal("123456.78"), Decimal("0.0425"), 180)
    assert payment.as_tuple().exponent == -2


@pytest.mark.parametrize(
    "loan_amount, term_months, expected",
    [
        ("120000", 360, "333.33"),
        ("1000", 3, "333.33"),
        ("2000", 3, "666.67"),  # 666.666... rounds half-up
        ("36000", 12, "3000.00"),
    ],
)
def test_compute_monthly_payment_zero_rate(loan_amount, term_months, expected):
    """Test zero-interest loans divide principal evenly instead of dividing by zero"""
    payment = compute_monthly_payment(Decimal(loan_amount), Decimal("0"), term_months)
    assert payment == Decimal(expected)


@pytest.mark.parametrize("loan_amount", ["1000", "50000", "750000"])
@pytest.mark.parametrize("rate", ["0.001", "0.065", "0.25"])
def test_compute_monthly_payment_positive(loan_amount, rate):
    """Test any positive loan produces a positive payment"""
    assert compute_monthly_payment(Decimal(loan_amount), Decimal(rate), 360) > 0


def test_compute_monthly_payment_accepts_plain_numbers():
    """Test ints and floats are converted without binary rounding drift"""
    assert compute_monthly_payment(300000, 0.065, 360) == Decimal("1896.20")


def test_compute_monthly_payment_zero_loan():
    """Test a fully paid-in-cash purchase has no payment"""
    assert compute_monthly_payment(Decimal("0"), Decimal("0.065"), 360) == Decimal("0.00")


@pytest.mark.parametrize(
    "loan_amount, rate, term_months",
    [
        ("-1", "0.05", 360),  # Negative principal
        ("100000", "0.05", 0),  # No term
        ("100000", "0.05", -12),
        ("100000", "6.5", 360),  # Percent instead of fraction
        ("100000", "-0.01", 360),
    ],
)
def test_compute_monthly_payment_invalid_input(loan_amount, rate, term_months):
    """Test malformed loan terms are rejected"""
    with pytest.raises(InvalidInputError):
        compute_monthly_payment(Decimal(loan_amount), Decimal(rate), term_months)


def test_monthly_payment_for_loan_terms():
    """Test LoanTerms convenience wrapper"""
    terms = LoanTerms(loan_amount=Decimal("300000"), annual_interest_rate=Decimal("0.065"), term_months=360)
    assert monthly_payment_for(terms) == Decimal("1896.20")


def test_generate_amortization_schedule_totals():
    """Test principal column sums to the loan and balance ends at zero"""
    schedule = generate_amortization_schedule(Decimal("10000"), Decimal("0.06"), 12)

    assert len(schedule) == 12
    assert schedule[0].interest == Decimal("50.00")  # 10000 * 0.005
    assert sum(p.principal for p in schedule) == Decimal("10000")
    assert schedule[-1].balance == 0
    assert [p.period for p in schedule] == list(range(1, 13))


def test_generate_amortization_schedule_last_payment_absorbs_remainder():
    """Test rounding drift lands on the final payment"""
    schedule = generate_amortization_schedule(Decimal("1000"), Decimal("0"), 3)

    assert [p.payment for p in schedule] == [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
    assert schedule[-1].balance == 0


def test_generate_amortization_schedule_zero_loan():
    """Test nothing to amortize"""
    assert generate_amortization_schedule(Decimal("0"), Decimal("0.065"), 360) == []


def test_build_cost_breakdown_invariants():
    """Test loan amount, closing costs and total follow from price and down payment"""
    breakdown = build_cost_breakdown(Decimal("500000"), Decimal("100000"), Decimal("0.065"), 30)

    assert breakdown.loan_amount == Decimal("400000")
    assert breakdown.closing_costs == Decimal("15000")
    assert breakdown.total_cost == Decimal("515000")
    assert breakdown.loan_term_years == 30
    assert breakdown.monthly_payment == compute_monthly_payment(Decimal("400000"), Decimal("0.065"), 360)


@pytest.mark.parametrize("price, down", [("333333.33", "0"), ("250000.01", "12500"), ("999999.99", "999999.99")])
def test_build_cost_breakdown_exact_totals(price, down):
    """Test closing costs are exact, not rounded"""
    purchase_price = Decimal(price)
    breakdown = build_cost_breakdown(purchase_price, Decimal(down), Decimal("0.05"), 15)

    assert breakdown.loan_amount == purchase_price - Decimal(down)
    assert breakdown.total_cost == purchase_price + Decimal("0.03") * purchase_price


def test_build_cost_breakdown_defaults():
    """Test marketplace default rate (6.5%) and term (30 years)"""
    breakdown = build_cost_breakdown(Decimal("400000"), Decimal("80000"))

    assert breakdown.interest_rate == Decimal("0.065")
    assert breakdown.loan_term_years == 30


def test_build_cost_breakdown_custom_policy():
    """Test closing cost rate is configurable"""
    policy = EnginePolicy(closing_cost_rate=Decimal("0.02"))
    breakdown = build_cost_breakdown(Decimal("400000"), Decimal("80000"), policy=policy)

    assert breakdown.closing_costs == Decimal("8000")
    assert breakdown.total_cost == Decimal("408000")


def test_build_cost_breakdown_all_cash():
    """Test down payment equal to price leaves no loan"""
    breakdown = build_cost_breakdown(Decimal("250000"), Decimal("250000"), Decimal("0.07"))

    assert breakdown.loan_amount == 0
    assert breakdown.monthly_payment == 0


@pytest.mark.parametrize("down", ["-1", "500000.01"])
def test_build_cost_breakdown_invalid_down_payment(down):
    """Test down payment must sit within [0, purchase price]"""
    with pytest.raises(InvalidInputError):
        build_cost_breakdown(Decimal("500000"), Decimal(down), Decimal("0.065"))


def test_minimum_down_payment():
    """Test 5% minimum down payment"""
    assert minimum_down_payment(Decimal("400000")) == Decimal("20000.00")
    assert minimum_down_payment(Decimal("400000"), EnginePolicy(min_down_payment_rate=Decimal("0.2"))) == Decimal("80000")


@pytest.mark.parametrize("rate", ["1e-70", "1e-30", "1e-27", "1e-25", "1e-20"])
def test_compute_monthly_payment_near_zero_rate(rate):
    """Test negligible rates converge on the zero-rate payment instead of dividing by zero"""
    payment = compute_monthly_payment(Decimal("120000"), Decimal(rate), 360)
    assert payment == Decimal("333.33")


def test_generate_amortization_schedule_near_zero_rate():
    """Test schedule with a negligible rate pays down principal evenly"""
    schedule = generate_amortization_schedule(Decimal("1000"), Decimal("1e-30"), 3)

    assert [p.payment for p in schedule] == [Decimal("333.33"), Decimal("333.33"), Decimal("333.34")]
    assert all(p.interest == 0 for p in schedule)
