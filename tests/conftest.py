"""Shared test fixtures and helpers."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from vehicletax.taxation.engine import VehicleTaxEngine
from vehicletax.taxation.models import VehicleTaxProfile
from vehicletax.taxation.tariffs import TariffBook, load_tariff_book


AS_OF = date(2026, 6, 1)


def make_profile(age: int = 0, **overrides: Any) -> VehicleTaxProfile:
    """Build a Wallonia/Brussels profile whose age is ``age`` years at AS_OF."""
    fields: dict[str, Any] = {
        "power_kw": 100.0,
        "fiscal_horsepower": 11,
        "co2_nedc": 120,
        "registration_year": AS_OF.year - age,
    }
    fields.update(overrides)
    return VehicleTaxProfile(**fields)


@pytest.fixture(scope="session")
def tariffs() -> TariffBook:
    return load_tariff_book()


@pytest.fixture
def engine(tariffs) -> VehicleTaxEngine:
    return VehicleTaxEngine(tariffs=tariffs)
