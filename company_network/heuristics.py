"""Ownership and risk heuristics.

Pure functions over input records. Nothing here is authoritative: the
ownership percentage is a best-effort parse of free-text natures of
control, and the risk level is a coarse proxy rather than a validated
risk model.
"""

import re
from collections.abc import Iterable
from datetime import date
from typing import Final

from pydantic import BaseModel, ConfigDict

from company_network.records import CompanyRecord
from company_network.schema import RiskLevel

# Explicit "{n}%" token anywhere in a nature of control
OWNERSHIP_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\d+)%")

# Known banded phrases, checked in order when no explicit percentage is present.
# Includes the Companies House nature-of-control codes, which carry no "%".
OWNERSHIP_BANDS: Final[tuple[tuple[str, int], ...]] = (
    ("more than 75%", 75),
    ("more than 50%", 50),
    ("more than 25%", 25),
    ("75-to-100-percent", 75),
    ("50-to-75-percent", 50),
    ("25-to-50-percent", 25),
)

DEFAULT_OWNERSHIP_PERCENTAGE: Final[int] = 25

ACTIVE_STATUS: Final[str] = "active"
DAYS_PER_MONTH: Final[int] = 30


class RiskWeights(BaseModel):
    """Score added for each risk signal on a company profile."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    inactive_status: int = 30
    missing_registered_office: int = 20
    missing_sic_codes: int = 15
    recently_incorporated: int = 25
    recent_incorporation_months: int = 12


class RiskThresholds(BaseModel):
    """Minimum score for each risk level above "low"."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    critical: int = 70
    high: int = 50
    medium: int = 30


DEFAULT_RISK_WEIGHTS: Final[RiskWeights] = RiskWeights()
DEFAULT_RISK_THRESHOLDS: Final[RiskThresholds] = RiskThresholds()


def extract_ownership_percentage(natures_of_control: Iterable[str] | None) -> int:
    """Extract an ownership percentage from natures of control.

    Each nature is checked in order: an explicit "{n}%" token wins, then the
    known banded phrases. The first nature that yields a value decides.

    Args:
        natures_of_control: Free-text nature of control strings. None is
            treated as an empty list.

    Returns:
        The recovered percentage, or DEFAULT_OWNERSHIP_PERCENTAGE (25)
        when nothing is recoverable. Never raises.

    Example:
        >>> extract_ownership_percentage(["more than 50% of shares"])
        50
        >>> extract_ownership_percentage(["some non-numeric description"])
        25
    """
    for nature in natures_of_control or ():
        match = OWNERSHIP_PATTERN.search(nature)
        if match:
            return int(match.group(1))

        lowered = nature.lower()
        for phrase, percentage in OWNERSHIP_BANDS:
            if phrase in lowered:
                return percentage

    return DEFAULT_OWNERSHIP_PERCENTAGE


def months_between(start: date, end: date) -> float:
    """Approximate number of 30-day months from start to end."""
    return (end - start).days / DAYS_PER_MONTH


def calculate_risk_score(
    company: CompanyRecord,
    today: date | None = None,
    weights: RiskWeights = DEFAULT_RISK_WEIGHTS,
) -> int:
    """Score a company profile by summing the weights of its risk signals.

    Signals: status other than "active", no registered office address,
    no SIC codes, and incorporation less than
    ``weights.recent_incorporation_months`` months before ``today``.

    Args:
        company: The company profile to score.
        today: Reference date for the incorporation age. Defaults to
            date.today().
        weights: Score per signal.

    Returns:
        The total risk score.
    """
    score = 0

    if company.company_status != ACTIVE_STATUS:
        score += weights.inactive_status
    if company.registered_office_address is None:
        score += weights.missing_registered_office
    if not company.sic_codes:
        score += weights.missing_sic_codes

    if company.date_of_creation is not None:
        age = months_between(company.date_of_creation, today or date.today())
        if age < weights.recent_incorporation_months:
            score += weights.recently_incorporated

    return score


def risk_level_for_score(
    score: int,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
) -> RiskLevel:
    """Map a risk score onto a risk level."""
    if score >= thresholds.critical:
        return "critical"
    if score >= thresholds.high:
        return "high"
    if score >= thresholds.medium:
        return "medium"
    return "low"


def calculate_risk_level(
    company: CompanyRecord,
    today: date | None = None,
    weights: RiskWeights = DEFAULT_RISK_WEIGHTS,
    thresholds: RiskThresholds = DEFAULT_RISK_THRESHOLDS,
) -> RiskLevel:
    """Score a company profile and return its risk level."""
    return risk_level_for_score(calculate_risk_score(company, today, weights), thresholds)
