"""Shared fixtures.

Every test runs against an isolated config directory via
NET_PAY_CONFIG_PATH so no real settings or jurisdictions are touched.
"""

import copy

import pytest

from netpay.sdk import JurisdictionConfig, clear_jurisdiction_cache, load_jurisdiction


SIMPLE_CONFIG = {
    "meta": {"country": "XX", "currency": "EUR", "tax_year": 2025},
    "tax_classes": {
        "A": {
            "label": "Test class",
            "basic_allowance": 10000,
            "additional_allowance": 0,
            "child_allowance_factor_multiplier": 1.0,
            "brackets": [
                {"up_to": 10000, "rate": 0.10, "base_tax": 0, "base_income": 0},
                {"up_to": None, "rate": 0.30, "base_tax": 1000, "base_income": 10000},
            ],
        },
    },
    "social_contributions": {
        "health": {"employee_rate": 0.07, "cap_monthly": 5000, "additional_rate": 0.01},
        "pension": {"employee_rate": 0.09, "cap_monthly": 7000},
        "unemployment": {"employee_rate": 0.01, "cap_monthly": 7000},
        "long_term_care": {
            "employee_rate": 0.02,
            "cap_monthly": 5000,
            "surcharge_without_children": 0.005,
            "child_discount_per_child_after_first": 0.0025,
            "max_child_discount_children": 3,
        },
    },
    "solidarity_tax": {"free_allowance": 50000, "rate": 0.05},
    "church_tax": {"rate": 0.09, "rate_by_state": {"BY": 0.08}},
    "allowances": {
        "home_office_daily_rate": 6,
        "home_office_max": 1260,
        "commute_rate_first_20": 0.30,
        "commute_rate_beyond": 0.38,
        "voluntary_insurance": {"threshold_monthly": 5000, "additional_rate": 0.02},
        "meal_voucher_tax_free_limit": 50,
        "capital_gains_allowance_max_employer": 40,
        "child_allowance_per_factor": 9600,
    },
    "company_car_benefit_rates": {"combustion": 0.01, "hybrid": 0.005, "electric": 0.0025},
    "company_pension_max_tax_free": 300,
}


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory and reset the cache."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("NET_PAY_CONFIG_PATH", str(config_dir))

    clear_jurisdiction_cache()
    yield {"config_dir": config_dir}
    clear_jurisdiction_cache()


@pytest.fixture
def simple_config_data():
    """Raw document of the small test jurisdiction (safe to mutate)."""
    return copy.deepcopy(SIMPLE_CONFIG)


@pytest.fixture
def simple_config():
    """Small jurisdiction with round numbers for exact assertions."""
    return JurisdictionConfig.model_validate(SIMPLE_CONFIG)


@pytest.fixture
def de_config():
    """Bundled German 2025 jurisdiction."""
    return load_jurisdiction("de-2025")
