"""Deterministic vehicle tax engine: profile in, report out."""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache

from vehicletax.core.config import Settings
from vehicletax.core.types import Region
from vehicletax.taxation.age import AgeResolver
from vehicletax.taxation.models import TaxReport, VehicleTaxProfile
from vehicletax.taxation.regions import FlandersPolicy, RegionPolicy, WalloniaBrusselsPolicy
from vehicletax.taxation.tariffs import TariffBook, load_tariff_book

logger = logging.getLogger(__name__)


class VehicleTaxEngine:
    """Resolves the vehicle age and dispatches to the profile's region policy.

    The engine holds no per-call state; one instance can serve any number of
    concurrent callers.
    """

    def __init__(
        self,
        tariffs: TariffBook | None = None,
        settings: Settings | None = None,
    ) -> None:
        if tariffs is None:
            settings = settings or Settings()
            tariffs = load_tariff_book(settings.tariffs.path)
        self._tariffs = tariffs
        self._age_resolver = AgeResolver(collector_age=tariffs.eco_malus.collector_age)
        self._policies: dict[Region, RegionPolicy] = {}
        self.register(WalloniaBrusselsPolicy(tariffs))
        self.register(FlandersPolicy())

    @property
    def tariffs(self) -> TariffBook:
        return self._tariffs

    def register(self, policy: RegionPolicy) -> None:
        self._policies[policy.region] = policy

    def calculate(self, profile: VehicleTaxProfile, as_of: date | None = None) -> TaxReport:
        age = self._age_resolver.resolve(profile, as_of)
        report = self._policies[profile.region].evaluate(profile, age)
        logger.debug(
            "Computed %s report for %s: age=%d total=%s annual=%s",
            report.status.value,
            report.region.value,
            report.age_years,
            report.registration_tax.total if report.registration_tax else None,
            report.annual_tax,
        )
        return report


@lru_cache(maxsize=1)
def get_default_engine() -> VehicleTaxEngine:
    return VehicleTaxEngine()


def calculate_taxes(profile: VehicleTaxProfile, as_of: date | None = None) -> TaxReport:
    """Compute the tax report for a profile with the default tariff book."""
    return get_default_engine().calculate(profile, as_of)
