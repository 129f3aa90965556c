"""Unit tests for settings and engine policy"""

import pytest
from decimal import Decimal
from pydantic import ValidationError
from listing_analytics.config import Settings
from listing_analytics.domain.exceptions import InvalidInputError
from listing_analytics.domain.policy import DEFAULT_POLICY, EnginePolicy


def test_default_settings_match_default_policy():
    """Test unconfigured settings reproduce the built-in policy"""
    assert Settings().to_policy() == DEFAULT_POLICY


def test_settings_override_from_environment(monkeypatch):
    """Test tunables are read from environment variables"""
    monkeypatch.setenv("CLOSING_COST_RATE", "0.025")
    monkeypatch.setenv("TREND_WINDOW_SIZE", "3")

    policy = Settings().to_policy()

    assert policy.closing_cost_rate == Decimal("0.025")
    assert policy.trend_window_size == 3
    assert policy.valuation_confidence == Decimal("0.75")


@pytest.mark.parametrize(
    "env_var, value",
    [
        ("TREND_WINDOW_SIZE", "0"),
        ("TREND_BAND", "1.5"),
        ("CLOSING_COST_RATE", "-0.01"),
        ("VALUATION_CONFIDENCE", "2"),
        ("LISTING_COUNTER_RATIO", "0"),
        ("EXTENDED_LISTING_DAYS", "-1"),
    ],
)
def test_settings_reject_out_of_range_tunables(monkeypatch, env_var, value):
    """Test misconfigured tunables fail at startup instead of silently changing results"""
    monkeypatch.setenv(env_var, value)

    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize(
    "overrides",
    [
        {"trend_window_size": 0},
        {"trend_window_size": -3},
        {"trend_band": Decimal("-0.05")},
        {"assumed_average_square_footage": Decimal("0")},
        {"accept_confidence": Decimal("1.2")},
        {"default_loan_term_years": 0},
        {"extended_listing_days": -1},
    ],
)
def test_policy_rejects_out_of_range_values(overrides):
    """Test EnginePolicy validates values passed directly"""
    with pytest.raises(InvalidInputError):
        EnginePolicy(**overrides)
