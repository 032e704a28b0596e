"""Companies House input record models using Pydantic v2.

This module defines the records the network builder consumes: a company
profile, its officers and its persons with significant control (PSCs),
grouped into a CompanyBundle.

Records mirror the Companies House REST API shapes. Unknown keys are
ignored because API payloads carry far more fields than the builder needs.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

UNNAMED_PSC_NAME: Final = "Unnamed person with significant control"


class InvalidRecordError(ValueError):
    """Raised when an input record is missing required identifying fields."""


class Address(BaseModel):
    """Structured registered office address."""

    model_config = ConfigDict(extra="ignore")

    premises: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    locality: str | None = None
    region: str | None = None
    postal_code: str | None = None
    country: str | None = None


class PartialDate(BaseModel):
    """Month and year only, as published for dates of birth."""

    model_config = ConfigDict(extra="ignore")

    month: int = Field(ge=1, le=12)
    year: int


class CompanyRecord(BaseModel):
    """Company profile record.

    Attributes:
        company_number: Unique Companies House number, upper-cased.
        company_name: Registered company name.
        company_status: Status string such as "active" or "dissolved".
        company_type: Company type such as "ltd" or "plc".
        date_of_creation: Incorporation date.
        registered_office_address: Registered office, if published.
        sic_codes: Standard Industrial Classification codes.
    """

    model_config = ConfigDict(extra="ignore")

    company_number: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    company_status: str | None = None
    company_type: str | None = None
    date_of_creation: date | None = None
    registered_office_address: Address | None = None
    sic_codes: list[str] = Field(default_factory=list)

    @field_validator("company_number")
    @classmethod
    def _normalise_company_number(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("company_number must not be blank")
        return value

    @field_validator("sic_codes", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class OfficerRecord(BaseModel):
    """Company officer (director, secretary, ...).

    An officer without resigned_on is currently active.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    officer_role: str = Field(min_length=1)
    appointed_on: date | None = None
    resigned_on: date | None = None
    nationality: str | None = None
    country_of_residence: str | None = None
    date_of_birth: PartialDate | None = None

    @property
    def is_active(self) -> bool:
        return self.resigned_on is None


class PscRecord(BaseModel):
    """Person with significant control.

    A PSC with ceased_on set no longer holds control. Super-secure PSC
    entries carry no name; display_name falls back to UNNAMED_PSC_NAME.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    kind: str | None = None
    natures_of_control: list[str] = Field(default_factory=list)
    ceased_on: date | None = None
    nationality: str | None = None
    country_of_residence: str | None = None
    date_of_birth: PartialDate | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("natures_of_control", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_active(self) -> bool:
        return self.ceased_on is None

    @property
    def display_name(self) -> str:
        return self.name or UNNAMED_PSC_NAME


class CompanyBundle(BaseModel):
    """A company profile together with its officers and PSCs.

    Officer and PSC lists accept either a bare list or the Companies House
    list envelope ({"items": [...]}).
    """

    model_config = ConfigDict(extra="ignore")

    profile: CompanyRecord
    officers: list[OfficerRecord] = Field(default_factory=list)
    pscs: list[PscRecord] = Field(default_factory=list)

    @field_validator("officers", "pscs", mode="before")
    @classmethod
    def _unwrap_items(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, Mapping):
            return value.get("items") or []
        return value


def coerce_bundle(value: CompanyBundle | Mapping[str, Any]) -> CompanyBundle:
    """Return value as a validated CompanyBundle.

    Args:
        value: A CompanyBundle, or a mapping with profile/officers/pscs keys.

    Returns:
        The validated CompanyBundle.

    Raises:
        InvalidRecordError: If the record fails validation, e.g. the
            profile has no company_number.
    """
    if isinstance(value, CompanyBundle):
        return value

    try:
        return CompanyBundle.model_validate(value)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise InvalidRecordError(
            f"Invalid company record at '{location}': {first['msg']}"
            f" ({exc.error_count()} error(s))"
        ) from exc
