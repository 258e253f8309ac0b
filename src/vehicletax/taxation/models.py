"""Input and output models for vehicle tax calculations."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from vehicletax.core.types import Region, ReportStatus, TaxBurden
from vehicletax.taxation.errors import InvalidProfileError


class VehicleTaxProfile(BaseModel):
    """Normalized vehicle attributes, independent of any form or table layout.

    ``power_kw`` only feeds the registration tax and ``fiscal_horsepower``
    only feeds the annual tax. Fiscal horsepower comes from engine
    displacement and is never derived from power.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    power_kw: float = Field(ge=0)
    fiscal_horsepower: float = Field(ge=0)
    co2_nedc: float = Field(ge=0)
    co2_wltp: float | None = Field(default=None, ge=0)
    registration_date: date | None = None
    registration_year: int | None = Field(default=None, ge=1900, validate_default=True)
    region: Region = Region.WALLONIA_BRUSSELS
    is_hybrid: bool = False
    is_electric: bool = False

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidProfileError.from_validation_error(exc) from exc

    # model_validate* bypass __init__, so they translate errors themselves.
    @classmethod
    def model_validate(cls, obj: Any, *args: Any, **kwargs: Any) -> VehicleTaxProfile:
        try:
            return super().model_validate(obj, *args, **kwargs)
        except ValidationError as exc:
            raise InvalidProfileError.from_validation_error(exc) from exc

    @classmethod
    def model_validate_json(cls, json_data: Any, *args: Any, **kwargs: Any) -> VehicleTaxProfile:
        try:
            return super().model_validate_json(json_data, *args, **kwargs)
        except ValidationError as exc:
            raise InvalidProfileError.from_validation_error(exc) from exc

    @classmethod
    def model_validate_strings(cls, obj: Any, *args: Any, **kwargs: Any) -> VehicleTaxProfile:
        try:
            return super().model_validate_strings(obj, *args, **kwargs)
        except ValidationError as exc:
            raise InvalidProfileError.from_validation_error(exc) from exc

    @field_validator("registration_year")
    @classmethod
    def require_age_source(cls, value: int | None, info: ValidationInfo) -> int | None:
        if value is None and info.data.get("registration_date") is None:
            raise ValueError("registration_date or registration_year is required")
        return value

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> VehicleTaxProfile:
        return cls(**data)


class RegistrationTax(BaseModel):
    """One-time registration tax (TMC) breakdown."""

    model_config = ConfigDict(frozen=True)

    base: float
    retained_percentage: float | None
    is_forfeit_floor: bool
    after_degressivity: float
    eco_malus: float = 0.0
    total: float


class FlandersNotice(BaseModel):
    """What can be said about a Flemish vehicle without computing an amount."""

    model_config = ConfigDict(frozen=True)

    official_url: str
    message: str
    is_hybrid: bool
    is_electric: bool
    has_wltp: bool


class TaxReport(BaseModel):
    """Result of evaluating one profile.

    For unsupported regions ``registration_tax``, ``annual_tax`` and
    ``classification`` are None and ``notice`` tells the caller where to look.
    """

    model_config = ConfigDict(frozen=True)

    region: Region
    status: ReportStatus
    age_years: int
    is_collector_exempt: bool
    registration_tax: RegistrationTax | None = None
    annual_tax: float | None = None
    classification: TaxBurden | None = None
    notice: FlandersNotice | None = None

    @property
    def is_supported(self) -> bool:
        return self.status == ReportStatus.COMPUTED

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the display layer."""
        d: dict[str, Any] = {
            "region": self.region.value,
            "status": self.status.value,
            "ageYears": self.age_years,
            "isCollectorExempt": self.is_collector_exempt,
            "registrationTax": None,
            "annualTax": self.annual_tax,
            "classification": self.classification.value if self.classification else None,
        }
        if self.registration_tax is not None:
            tax = self.registration_tax
            d["registrationTax"] = {
                "base": tax.base,
                "retainedPercentage": tax.retained_percentage,
                "isForfeitFloor": tax.is_forfeit_floor,
                "afterDegressivity": tax.after_degressivity,
                "ecoMalus": tax.eco_malus,
                "total": tax.total,
            }
        if self.notice is not None:
            d["notice"] = {
                "officialUrl": self.notice.official_url,
                "message": self.notice.message,
                "isHybrid": self.notice.is_hybrid,
                "isElectric": self.notice.is_electric,
                "hasWltp": self.notice.has_wltp,
            }
        return d
