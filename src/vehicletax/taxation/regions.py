"""Region-specific tax policies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from vehicletax.core.types import Region, ReportStatus
from vehicletax.taxation.age import VehicleAge
from vehicletax.taxation.circulation import AnnualCirculationTaxCalculator
from vehicletax.taxation.eco_malus import EcoMalusCalculator
from vehicletax.taxation.models import (
    FlandersNotice,
    RegistrationTax,
    TaxReport,
    VehicleTaxProfile,
)
from vehicletax.taxation.registration import RegistrationTaxCalculator
from vehicletax.taxation.tariffs import TariffBook

logger = logging.getLogger(__name__)

FLANDERS_OFFICIAL_URL = "https://belastingen.vlaanderen.be"

_FLANDERS_MESSAGE = (
    "Flanders uses a green formula based on WLTP emissions, the Euro standard "
    "and other criteria. Consult the official Flemish tax site for an exact amount."
)


class RegionPolicy(ABC):
    """Turns a validated profile and its age into a report for one region."""

    region: Region

    @abstractmethod
    def evaluate(self, profile: VehicleTaxProfile, age: VehicleAge) -> TaxReport:
        ...


class WalloniaBrusselsPolicy(RegionPolicy):
    """TMC with degressivity and eco-malus, plus the annual circulation tax."""

    region = Region.WALLONIA_BRUSSELS

    def __init__(self, tariffs: TariffBook) -> None:
        self._tariffs = tariffs
        self._registration = RegistrationTaxCalculator(
            tariffs.registration_base, tariffs.degressivity
        )
        self._eco_malus = EcoMalusCalculator(tariffs.eco_malus)
        self._circulation = AnnualCirculationTaxCalculator(tariffs.circulation)

    def evaluate(self, profile: VehicleTaxProfile, age: VehicleAge) -> TaxReport:
        degressive = self._registration.compute(profile.power_kw, age.years)
        eco_malus = self._eco_malus.compute(
            profile.co2_nedc,
            self.region,
            age.is_collector_exempt,
            is_forfeit_floor=degressive.is_forfeit_floor,
        )
        total = round(degressive.after_degressivity + eco_malus, 2)

        registration_tax = RegistrationTax(
            base=degressive.base,
            retained_percentage=degressive.retained_percentage,
            is_forfeit_floor=degressive.is_forfeit_floor,
            after_degressivity=degressive.after_degressivity,
            eco_malus=eco_malus,
            total=total,
        )

        return TaxReport(
            region=self.region,
            status=ReportStatus.COMPUTED,
            age_years=age.years,
            is_collector_exempt=age.is_collector_exempt,
            registration_tax=registration_tax,
            annual_tax=self._circulation.compute(profile.fiscal_horsepower),
            classification=self._tariffs.burden.classify(total),
        )


class FlandersPolicy(RegionPolicy):
    """Green formula not supported: answers with a notice instead of amounts."""

    region = Region.FLANDERS

    def __init__(self, official_url: str = FLANDERS_OFFICIAL_URL) -> None:
        self._official_url = official_url

    def evaluate(self, profile: VehicleTaxProfile, age: VehicleAge) -> TaxReport:
        logger.info("Flemish taxes are not computed; referring to %s", self._official_url)
        return TaxReport(
            region=self.region,
            status=ReportStatus.UNSUPPORTED_REGION,
            age_years=age.years,
            is_collector_exempt=age.is_collector_exempt,
            notice=FlandersNotice(
                official_url=self._official_url,
                message=_FLANDERS_MESSAGE,
                is_hybrid=profile.is_hybrid,
                is_electric=profile.is_electric,
                has_wltp=profile.co2_wltp is not None,
            ),
        )
