"""Tariff book: the legal schedules behind every calculator.

Schedules are kept in YAML (``config/tariffs.yml``) and validated into frozen
models on load, so a malformed table fails before any profile is evaluated.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from vehicletax.core.types import Region, TaxBurden
from vehicletax.taxation.brackets import BracketTable

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "tariffs.yml"


class DegressivityStep(BaseModel):
    """Share of the base kept while the vehicle is at most ``max_age`` years old."""

    model_config = ConfigDict(frozen=True)

    max_age: int = Field(ge=0)
    retained_percentage: float = Field(gt=0, le=100)


class DegressivitySchedule(BaseModel):
    """Stepwise age reduction ending in a fixed forfeit amount."""

    model_config = ConfigDict(frozen=True)

    steps: tuple[DegressivityStep, ...]
    forfeit_floor: float = Field(ge=0)

    @model_validator(mode="after")
    def check_steps(self) -> DegressivitySchedule:
        if not self.steps:
            raise ValueError("Degressivity schedule has no steps")
        ages = [step.max_age for step in self.steps]
        if any(b <= a for a, b in zip(ages, ages[1:])):
            raise ValueError(f"Degressivity steps must have increasing max_age, got {ages}")
        return self

    @property
    def last_age(self) -> int:
        return self.steps[-1].max_age

    def retained_percentage(self, age_years: int) -> float | None:
        """Percentage kept at this age, or None once the forfeit floor applies."""
        for step in self.steps:
            if age_years <= step.max_age:
                return step.retained_percentage
        return None


class EcoMalusSchedule(BaseModel):
    """CO2 bands; nothing is due strictly below ``exempt_below`` g/km."""

    model_config = ConfigDict(frozen=True)

    collector_age: int = Field(ge=0)
    exempt_below: float = Field(ge=0)
    waived_at_forfeit_floor: bool = True
    bands: BracketTable


class CirculationSchedule(BaseModel):
    """Bounded fiscal horsepower bands plus a linear rate above the last band."""

    model_config = ConfigDict(frozen=True)

    bands: BracketTable
    per_cv: float = Field(ge=0)

    @model_validator(mode="after")
    def check_bounded(self) -> CirculationSchedule:
        if self.bands.open_ended:
            raise ValueError(
                f"Bracket table {self.bands.name!r} must end on a bounded band; "
                "amounts above it are extrapolated"
            )
        return self


class BurdenThresholds(BaseModel):
    model_config = ConfigDict(frozen=True)

    low: float
    moderate: float

    @model_validator(mode="after")
    def check_order(self) -> BurdenThresholds:
        if self.moderate < self.low:
            raise ValueError("Burden thresholds: moderate must be >= low")
        return self

    def classify(self, total: float) -> TaxBurden:
        if total <= self.low:
            return TaxBurden.LOW
        if total <= self.moderate:
            return TaxBurden.MODERATE
        return TaxBurden.HIGH


class TariffBook(BaseModel):
    """Every schedule needed to evaluate one region for one tax year."""

    model_config = ConfigDict(frozen=True)

    region: Region
    year: int
    registration_base: BracketTable
    degressivity: DegressivitySchedule
    eco_malus: EcoMalusSchedule
    circulation: CirculationSchedule
    burden: BurdenThresholds

    @model_validator(mode="after")
    def check_open_ended(self) -> TariffBook:
        for table in (self.registration_base, self.eco_malus.bands):
            if not table.open_ended:
                raise ValueError(f"Bracket table {table.name!r} must end on an open-ended row")
        return self

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> TariffBook:
        if not isinstance(raw, Mapping):
            raise ValueError(
                f"Tariff book must be a mapping of sections, got {type(raw).__name__}"
            )
        degressivity = _section(raw, "degressivity", Mapping)
        eco_malus = _section(raw, "eco_malus", Mapping)
        circulation = _section(raw, "circulation", Mapping)
        try:
            return cls(
                region=raw["region"],
                year=raw["year"],
                registration_base=BracketTable.from_rows(
                    "registration_base", _section(raw, "registration_base", list)
                ),
                degressivity=DegressivitySchedule(
                    steps=tuple(_section(degressivity, "steps", list)),
                    forfeit_floor=degressivity["forfeit_floor"],
                ),
                eco_malus=EcoMalusSchedule(
                    collector_age=eco_malus["collector_age"],
                    exempt_below=eco_malus["exempt_below"],
                    waived_at_forfeit_floor=eco_malus.get("waived_at_forfeit_floor", True),
                    bands=BracketTable.from_rows("eco_malus", _section(eco_malus, "bands", list)),
                ),
                circulation=CirculationSchedule(
                    bands=BracketTable.from_rows(
                        "circulation", _section(circulation, "bands", list)
                    ),
                    per_cv=_section(circulation, "extrapolation", Mapping)["per_cv"],
                ),
                burden=BurdenThresholds(**_section(raw, "burden", Mapping)),
            )
        except KeyError as exc:
            raise ValueError(f"Tariff book is missing required section {exc.args[0]!r}") from exc


def _section(raw: Mapping[str, Any], name: str, kind: type) -> Any:
    if name not in raw:
        raise ValueError(f"Tariff book is missing required section {name!r}")
    value = raw[name]
    if not isinstance(value, kind):
        expected = "mapping" if kind is Mapping else kind.__name__
        raise ValueError(
            f"Tariff book section {name!r} must be a {expected}, got {type(value).__name__}"
        )
    return value


def load_tariff_book(config_path: str | Path | None = None) -> TariffBook:
    """Load and validate a tariff book from YAML."""
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH
    with open(path) as fh:
        raw = yaml.safe_load(fh) or {}

    book = TariffBook.from_dict(raw)
    logger.debug(
        "Loaded %s tariffs for %s from %s", book.year, book.region.value, path
    )
    return book
