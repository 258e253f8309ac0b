"""Recurring annual circulation tax."""

from __future__ import annotations

from vehicletax.taxation.tariffs import CirculationSchedule


class AnnualCirculationTaxCalculator:
    """Annual tax as a function of fiscal horsepower alone.

    Fiscal horsepower is set by engine displacement; this calculator has no
    access to DIN power and must not be given a converted power figure.
    """

    def __init__(self, schedule: CirculationSchedule) -> None:
        self._schedule = schedule

    def compute(self, fiscal_horsepower: float) -> float:
        bands = self._schedule.bands
        ceiling = bands.ceiling
        if fiscal_horsepower <= ceiling:
            return bands.lookup(fiscal_horsepower)

        top = bands.rows[-1].value
        return round(top + (fiscal_horsepower - ceiling) * self._schedule.per_cv, 2)
