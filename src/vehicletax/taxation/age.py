"""Vehicle age in complete years."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from vehicletax.taxation.models import VehicleTaxProfile

COLLECTOR_AGE = 30


class VehicleAge(BaseModel):
    model_config = ConfigDict(frozen=True)

    years: int
    is_collector_exempt: bool


class AgeResolver:
    """Derives vehicle age from the registration date, or the year if no date is known."""

    def __init__(self, collector_age: int = COLLECTOR_AGE) -> None:
        self._collector_age = collector_age

    @property
    def collector_age(self) -> int:
        return self._collector_age

    def resolve(self, profile: VehicleTaxProfile, as_of: date | None = None) -> VehicleAge:
        today = as_of or date.today()

        if profile.registration_date is not None:
            years = self.complete_years(profile.registration_date, today)
        else:
            # Guaranteed by profile validation when no date is present
            years = today.year - profile.registration_year

        years = max(0, years)
        return VehicleAge(years=years, is_collector_exempt=years >= self._collector_age)

    @staticmethod
    def complete_years(start: date, end: date) -> int:
        """Whole years elapsed, one less if the anniversary is still ahead."""
        years = end.year - start.year
        if (end.month, end.day) < (start.month, start.day):
            years -= 1
        return years


def resolve_age(profile: VehicleTaxProfile, as_of: date | None = None) -> VehicleAge:
    return AgeResolver().resolve(profile, as_of)
