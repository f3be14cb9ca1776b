"""Tests for dashboard/validators.py — sanitisation and form validation."""

from __future__ import annotations

import pytest

from dashboard.validators import (
    is_allowed_domain,
    is_valid_email,
    sanitize_campaign,
    sanitize_string,
    validate_campaign,
    validate_config,
)


def _campaign(**overrides) -> dict:
    data = {
        "name": "Carwow Spring Push",
        "month": "2025-03",
        "type": "Awareness",
        "provider": "Carwow",
        "plan": {"spend": 10000, "impressions": 900000, "clicks": 15000},
    }
    data.update(overrides)
    return data


def _budget(**overrides) -> dict:
    data = {"fiscal_label": "FY2025", "annual_budget": 1000, "q1": 250, "q2": 250, "q3": 250, "q4": 250}
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Sanitisation
# ---------------------------------------------------------------------------


def test_sanitize_strips_tags_and_scripts() -> None:
    assert sanitize_string("  <b>Spring</b> sale ") == "Spring sale"
    assert sanitize_string("javascript:alert(1)") == "alert(1)"
    assert sanitize_string('x onclick="go()"') == 'x "go()"'


def test_sanitize_non_string_is_empty() -> None:
    assert sanitize_string(None) == ""
    assert sanitize_string(42) == ""


def test_sanitize_caps_length() -> None:
    assert len(sanitize_string("a" * 800)) == 500


def test_sanitize_campaign_keeps_other_fields() -> None:
    data = _campaign(name="<i>Promo</i>")
    out = sanitize_campaign(data)
    assert out["name"] == "Promo"
    assert out["plan"] == data["plan"]
    assert data["name"] == "<i>Promo</i>"


# ---------------------------------------------------------------------------
# Campaign validation
# ---------------------------------------------------------------------------


def test_valid_campaign() -> None:
    result = validate_campaign(_campaign())
    assert result.is_valid
    assert result.errors == {}


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"name": "ab"}, "name"),
        ({"name": "x" * 201}, "name"),
        ({"month": "2025-3"}, "month"),
        ({"month": "March"}, "month"),
        ({"type": "Retention"}, "type"),
        ({"provider": "MySpace"}, "provider"),
    ],
)
def test_invalid_campaign_fields(overrides, field) -> None:
    result = validate_campaign(_campaign(**overrides))
    assert not result.is_valid
    assert field in result.errors


def test_plan_limits() -> None:
    result = validate_campaign(_campaign(plan={"spend": 2_000_000, "impressions": 200_000_000, "clicks": 1}))
    assert result.errors["spend"] == "Spend cannot exceed £1,000,000 per campaign"
    assert result.errors["impressions"] == "Impressions seem unrealistically high"


def test_plan_engagement_field_depends_on_type() -> None:
    plan = {"spend": 100, "impressions": 1000, "clicks": 10}
    assert validate_campaign(_campaign(plan=plan)).is_valid
    result = validate_campaign(_campaign(type="Conversion", plan=plan))
    assert set(result.errors) == {"leads"}


def test_booleans_are_not_numbers() -> None:
    result = validate_campaign(_campaign(plan={"spend": True, "impressions": 1000, "clicks": 10}))
    assert "spend" in result.errors


def test_conversion_actuals_need_sales_and_gross_profit() -> None:
    data = _campaign(
        type="Conversion",
        plan={"spend": 100, "impressions": 1000, "leads": 5},
        actuals={"spend": 90, "impressions": 950},
    )
    result = validate_campaign(data)
    assert set(result.errors) == {"sales", "gross_profit"}


def test_negative_actuals() -> None:
    result = validate_campaign(_campaign(actuals={"spend": -1, "impressions": -5}))
    assert set(result.errors) == {"actual_spend", "actual_impressions"}


def test_empty_plan_and_actuals_are_still_checked() -> None:
    result = validate_campaign(_campaign(plan={}, actuals={}))
    assert {"spend", "impressions", "clicks", "actual_spend", "actual_impressions"} <= set(result.errors)


def test_overlong_blank_name_reports_length() -> None:
    result = validate_campaign(_campaign(name=" " * 201))
    assert result.errors["name"] == "Campaign name must be less than 200 characters"


def test_custom_provider_list() -> None:
    assert validate_campaign(_campaign(provider="Motors.co.uk"), providers=["Motors.co.uk"]).is_valid


# ---------------------------------------------------------------------------
# Budget validation
# ---------------------------------------------------------------------------


def test_valid_budget() -> None:
    assert validate_config(_budget()).is_valid


def test_quarters_within_tolerance() -> None:
    assert validate_config(_budget(q4=259)).is_valid
    result = validate_config(_budget(q4=300))
    assert "quarters" in result.errors


def test_budget_bounds() -> None:
    assert "annual_budget" in validate_config(_budget(annual_budget=0)).errors
    too_big = validate_config(_budget(annual_budget=20_000_000))
    assert too_big.errors["annual_budget"] == "Annual budget cannot exceed £10,000,000"


def test_missing_budget_fields() -> None:
    result = validate_config({})
    assert set(result.errors) == {"fiscal_label", "annual_budget", "q1", "q2", "q3", "q4"}


# ---------------------------------------------------------------------------
# Email
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("jane.doe@volvocars.com", True),
        ("ops+plans@volvo.com", True),
        ("no-at-sign.com", False),
        ("two@@volvo.com", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_email(email, expected) -> None:
    assert is_valid_email(email) is expected


def test_is_allowed_domain() -> None:
    assert is_allowed_domain("someone@VolvoCars.com")
    assert not is_allowed_domain("someone@gmail.com")
    assert not is_allowed_domain("someone@")
    assert not is_allowed_domain(None)
    assert is_allowed_domain("a@agency.co.uk", allowed=["agency.co.uk"])
