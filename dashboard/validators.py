"""Input validation & sanitisation for user-entered campaign and budget data.

Everything that reaches the benchmarking engine passes through here first.
Invalid input is reported as a ``ValidationResult``, never raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence

VALID_PROVIDERS = ("Carwow", "Autotrader", "Leasing.com", "WhatCar?", "PistonHeads", "AutoExpress")
ALLOWED_DOMAINS = ("volvocars.com", "volvo.com")
CAMPAIGN_TYPES = ("Conversion", "Awareness")

MAX_STRING_LENGTH = 500
MAX_CAMPAIGN_SPEND = 1_000_000
MAX_IMPRESSIONS = 100_000_000
MAX_ANNUAL_BUDGET = 10_000_000
# Quarterly budgets may drift from the annual budget by this fraction.
BUDGET_VARIANCE_TOLERANCE = 0.01

_TAG_RE = re.compile(r"<[^>]*>")
_SCRIPT_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)
_MONTH_RE = re.compile(r"\d{4}-\d{2}")
_EMAIL_RE = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)


@dataclass(frozen=True)
class ValidationResult:
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _non_negative(x: Any) -> bool:
    return _is_number(x) and x >= 0


def sanitize_string(value: Any) -> str:
    """Strip markup and script injection vectors, trim, cap the length."""
    if not isinstance(value, str):
        return ""
    cleaned = _TAG_RE.sub("", value)
    cleaned = _SCRIPT_SCHEME_RE.sub("", cleaned)
    cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
    return cleaned.strip()[:MAX_STRING_LENGTH]


def sanitize_campaign(data: Mapping[str, Any]) -> dict:
    out = dict(data)
    for key in ("name", "provider", "type", "month"):
        out[key] = sanitize_string(data.get(key))
    return out


def validate_campaign(
    data: Mapping[str, Any],
    providers: Sequence[str] = VALID_PROVIDERS,
) -> ValidationResult:
    """Validate a campaign form before it is saved or benchmarked.

    ``plan`` and ``actuals`` are optional nested mappings. Engagement is
    clicks for Awareness campaigns and leads for Conversion campaigns, so only
    the one matching ``type`` is required.
    """
    errors: Dict[str, str] = {}

    name = data.get("name")
    if not isinstance(name, str) or len(name.strip()) < 3:
        errors["name"] = "Campaign name must be at least 3 characters"
    if isinstance(name, str) and len(name) > 200:
        errors["name"] = "Campaign name must be less than 200 characters"

    month = data.get("month")
    if not isinstance(month, str) or not _MONTH_RE.fullmatch(month):
        errors["month"] = "Invalid month format. Use YYYY-MM"

    ctype = data.get("type")
    if ctype not in CAMPAIGN_TYPES:
        errors["type"] = "Type must be either 'Conversion' or 'Awareness'"

    if data.get("provider") not in providers:
        errors["provider"] = "Invalid provider"

    plan = data.get("plan")
    if plan is not None:
        spend = plan.get("spend")
        if not _non_negative(spend):
            errors["spend"] = "Spend must be a positive number"
        elif spend > MAX_CAMPAIGN_SPEND:
            errors["spend"] = "Spend cannot exceed £1,000,000 per campaign"

        impressions = plan.get("impressions")
        if not _non_negative(impressions):
            errors["impressions"] = "Impressions must be a positive number"
        elif impressions > MAX_IMPRESSIONS:
            errors["impressions"] = "Impressions seem unrealistically high"

        if ctype == "Awareness" and not _non_negative(plan.get("clicks")):
            errors["clicks"] = "Clicks must be a positive number for Awareness campaigns"
        if ctype == "Conversion" and not _non_negative(plan.get("leads")):
            errors["leads"] = "Leads must be a positive number for Conversion campaigns"

    actuals = data.get("actuals")
    if actuals is not None:
        if not _non_negative(actuals.get("spend")):
            errors["actual_spend"] = "Actual spend must be a positive number"
        if not _non_negative(actuals.get("impressions")):
            errors["actual_impressions"] = "Actual impressions must be a positive number"
        if ctype == "Conversion":
            if not _non_negative(actuals.get("sales")):
                errors["sales"] = "Sales must be a positive number"
            if not _non_negative(actuals.get("gross_profit")):
                errors["gross_profit"] = "Gross profit must be a positive number"

    return ValidationResult(errors)


def validate_config(data: Mapping[str, Any]) -> ValidationResult:
    """Validate the fiscal budget configuration."""
    errors: Dict[str, str] = {}

    label = data.get("fiscal_label")
    if not isinstance(label, str) or len(label.strip()) < 2:
        errors["fiscal_label"] = "Fiscal label is required"

    annual = data.get("annual_budget")
    if not _is_number(annual) or annual <= 0:
        errors["annual_budget"] = "Annual budget must be a positive number"
    elif annual > MAX_ANNUAL_BUDGET:
        errors["annual_budget"] = "Annual budget cannot exceed £10,000,000"

    quarters = ("q1", "q2", "q3", "q4")
    for q in quarters:
        if not _non_negative(data.get(q)):
            errors[q] = f"{q.upper()} budget must be a positive number"

    if _is_number(annual) and annual > 0 and all(_is_number(data.get(q)) for q in quarters):
        quarter_sum = sum(data[q] for q in quarters)
        if abs(quarter_sum - annual) / annual > BUDGET_VARIANCE_TOLERANCE:
            errors["quarters"] = "Quarterly budgets should sum to annual budget"

    return ValidationResult(errors)


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str):
        return False
    return _EMAIL_RE.fullmatch(email) is not None


def is_allowed_domain(email: Any, allowed: Sequence[str] = ALLOWED_DOMAINS) -> bool:
    if not email or not isinstance(email, str):
        return False
    parts = email.split("@")
    if len(parts) < 2 or not parts[1]:
        return False
    return parts[1].lower() in {d.lower() for d in allowed}
