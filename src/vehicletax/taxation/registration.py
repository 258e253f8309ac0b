"""One-time registration tax (taxe de mise en circulation, TMC)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from vehicletax.taxation.brackets import BracketTable
from vehicletax.taxation.tariffs import DegressivitySchedule


class DegressiveTax(BaseModel):
    """Base amount and what is left of it after the age reduction."""

    model_config = ConfigDict(frozen=True)

    base: float
    retained_percentage: float | None
    is_forfeit_floor: bool
    after_degressivity: float


class RegistrationTaxCalculator:
    """Computes the TMC from DIN power and vehicle age.

    The base comes from the power table. It is reduced stepwise with age and,
    once the vehicle is older than the schedule covers, replaced by the
    statutory forfeit amount whatever the base was.
    """

    def __init__(self, base_table: BracketTable, schedule: DegressivitySchedule) -> None:
        self._base_table = base_table
        self._schedule = schedule

    def base_for(self, power_kw: float) -> float:
        return self._base_table.lookup(power_kw)

    def compute(self, power_kw: float, age_years: int) -> DegressiveTax:
        base = self.base_for(power_kw)
        retained = self._schedule.retained_percentage(age_years)

        if retained is None:
            return DegressiveTax(
                base=base,
                retained_percentage=None,
                is_forfeit_floor=True,
                after_degressivity=self._schedule.forfeit_floor,
            )

        return DegressiveTax(
            base=base,
            retained_percentage=retained,
            is_forfeit_floor=False,
            after_degressivity=round(base * retained / 100.0, 2),
        )
