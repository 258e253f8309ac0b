"""CO2 surcharge added to the registration tax."""

from __future__ import annotations

from vehicletax.core.types import Region
from vehicletax.taxation.tariffs import EcoMalusSchedule


class EcoMalusCalculator:
    """Banded surcharge on NEDC CO2 emissions.

    Only levied in Wallonia/Brussels and never on collector vehicles. When
    the schedule says so, it is also waived once the forfeit amount replaces
    the registration tax.
    """

    def __init__(self, schedule: EcoMalusSchedule) -> None:
        self._schedule = schedule

    def compute(
        self,
        co2_nedc: float,
        region: Region,
        is_collector_exempt: bool,
        is_forfeit_floor: bool = False,
    ) -> float:
        if region != Region.WALLONIA_BRUSSELS or is_collector_exempt:
            return 0.0
        if co2_nedc < self._schedule.exempt_below:
            return 0.0
        if is_forfeit_floor and self._schedule.waived_at_forfeit_floor:
            return 0.0
        return self._schedule.bands.lookup(co2_nedc)
