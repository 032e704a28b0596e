"""Shared fixtures for the company network tests."""

from datetime import date
from typing import Any

import pytest

# Fixed reference date so risk scoring is deterministic
TODAY = date(2024, 6, 1)


def make_profile(number: str = "01234567", **overrides: Any) -> dict[str, Any]:
    """Build a low-risk company profile payload."""
    profile: dict[str, Any] = {
        "company_number": number,
        "company_name": f"Company {number} Ltd",
        "company_status": "active",
        "company_type": "ltd",
        "date_of_creation": "2010-01-15",
        "registered_office_address": {
            "address_line_1": "1 High Street",
            "locality": "London",
            "postal_code": "EC1A 1AA",
        },
        "sic_codes": ["62020"],
    }
    profile.update(overrides)
    return profile


def make_officer(name: str, role: str = "director", **overrides: Any) -> dict[str, Any]:
    officer: dict[str, Any] = {
        "name": name,
        "officer_role": role,
        "appointed_on": "2015-03-01",
        "nationality": "British",
    }
    officer.update(overrides)
    return officer


def make_psc(name: str, natures: list[str] | None = None, **overrides: Any) -> dict[str, Any]:
    psc: dict[str, Any] = {
        "name": name,
        "natures_of_control": natures if natures is not None else ["ownership-of-shares (60%)"],
        "nationality": "British",
    }
    psc.update(overrides)
    return psc


@pytest.fixture
def primary_bundle() -> dict[str, Any]:
    """Primary company with 2 active officers, 1 resigned officer and 1 active PSC at 60%."""
    return {
        "profile": make_profile("01234567"),
        "officers": [
            make_officer("Alice Active"),
            make_officer("Bob Active", role="secretary"),
            make_officer("Carol Resigned", resigned_on="2020-05-01"),
        ],
        "pscs": [make_psc("Dan Owner")],
    }


@pytest.fixture
def related_bundles() -> list[dict[str, Any]]:
    return [
        {"profile": make_profile("07654321")},
        {"profile": make_profile("SC111111")},
    ]
