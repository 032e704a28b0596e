"""Unit tests for the heuristics module.

Tests ownership extraction:
- Explicit percentage tokens
- Banded phrases and Companies House band codes
- Default when nothing is recoverable

Tests risk scoring:
- Individual signals and their weights
- Score to level mapping
- Tunable weights and thresholds
"""

from datetime import date

import pytest

from company_network.heuristics import (
    DEFAULT_OWNERSHIP_PERCENTAGE,
    RiskThresholds,
    RiskWeights,
    calculate_risk_level,
    calculate_risk_score,
    extract_ownership_percentage,
    months_between,
    risk_level_for_score,
)
from company_network.records import Address, CompanyRecord

TODAY = date(2024, 6, 1)


def _company(**overrides: object) -> CompanyRecord:
    fields: dict[str, object] = {
        "company_number": "01234567",
        "company_name": "Steady Ltd",
        "company_status": "active",
        "date_of_creation": date(2014, 6, 1),
        "registered_office_address": Address(address_line_1="1 High Street"),
        "sic_codes": ["62020"],
    }
    fields.update(overrides)
    return CompanyRecord(**fields)


class TestExtractOwnershipPercentage:
    """Tests for extract_ownership_percentage."""

    def test_explicit_percentage(self) -> None:
        """An explicit "{n}%" token should be used directly."""
        assert extract_ownership_percentage(["ownership-of-shares-75-to-100-percent (75%)"]) == 75

    def test_banded_phrase(self) -> None:
        assert extract_ownership_percentage(["more than 50% of shares"]) == 50

    def test_default_when_nothing_recoverable(self) -> None:
        assert extract_ownership_percentage(["some non-numeric description"]) == 25

    def test_empty_and_none_use_default(self) -> None:
        assert extract_ownership_percentage([]) == DEFAULT_OWNERSHIP_PERCENTAGE
        assert extract_ownership_percentage(None) == DEFAULT_OWNERSHIP_PERCENTAGE

    @pytest.mark.parametrize(
        ("nature", "expected"),
        [
            ("ownership-of-shares-75-to-100-percent", 75),
            ("voting-rights-50-to-75-percent", 50),
            ("ownership-of-shares-25-to-50-percent", 25),
        ],
    )
    def test_companies_house_band_codes(self, nature: str, expected: int) -> None:
        """Companies House band codes carry no "%" but map to their lower bound."""
        assert extract_ownership_percentage([nature]) == expected

    def test_first_recoverable_nature_wins(self) -> None:
        natures = ["right-to-appoint-and-remove-directors", "holds 60% of shares", "more than 75%"]

        assert extract_ownership_percentage(natures) == 60


class TestRiskScoring:
    """Tests for calculate_risk_score and risk_level_for_score."""

    def test_established_active_company_is_low(self) -> None:
        """Active, full address, SIC codes and a 10-year history scores 0."""
        company = _company()

        assert calculate_risk_score(company, today=TODAY) == 0
        assert calculate_risk_level(company, today=TODAY) == "low"

    def test_worst_case_company_is_critical(self) -> None:
        """Dissolved, no office, no SIC codes, 2 months old scores 90."""
        company = _company(
            company_status="dissolved",
            registered_office_address=None,
            sic_codes=[],
            date_of_creation=date(2024, 4, 1),
        )

        assert calculate_risk_score(company, today=TODAY) == 90
        assert calculate_risk_level(company, today=TODAY) == "critical"

    def test_missing_status_counts_as_inactive(self) -> None:
        assert calculate_risk_score(_company(company_status=None), today=TODAY) == 30

    def test_missing_creation_date_adds_nothing(self) -> None:
        assert calculate_risk_score(_company(date_of_creation=None), today=TODAY) == 0

    def test_new_company_boundary(self) -> None:
        """Age is measured in 30-day months; 360 days is exactly 12 months."""
        twelve_months_old = _company(date_of_creation=date(2023, 6, 7))  # 360 days before TODAY
        assert months_between(date(2023, 6, 7), TODAY) == 360 / 30
        assert calculate_risk_score(twelve_months_old, today=TODAY) == 0
        assert calculate_risk_score(_company(date_of_creation=date(2023, 6, 8)), today=TODAY) == 25

    @pytest.mark.parametrize(
        ("score", "level"),
        [(0, "low"), (29, "low"), (30, "medium"), (49, "medium"), (50, "high"), (69, "high"), (70, "critical")],
    )
    def test_level_thresholds(self, score: int, level: str) -> None:
        assert risk_level_for_score(score) == level

    def test_custom_weights_and_thresholds(self) -> None:
        """Weights and thresholds are tunable without touching the scoring code."""
        company = _company(sic_codes=[])
        weights = RiskWeights(missing_sic_codes=40)

        assert calculate_risk_score(company, today=TODAY, weights=weights) == 40
        assert risk_level_for_score(40, RiskThresholds(critical=40, high=35, medium=10)) == "critical"
