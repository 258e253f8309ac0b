"""Builds tax profiles from marketplace listing records.

Listings store power in horsepower and the region as the seller picked it
("wallonie", "bruxelles", "flandre"). Unit conversion and region defaults
happen here, before the engine sees the vehicle.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from vehicletax.core.config import Settings
from vehicletax.core.types import Region
from vehicletax.taxation.errors import InvalidProfileError
from vehicletax.taxation.models import VehicleTaxProfile

_REGION_ALIASES: dict[str, Region] = {
    "wallonie": Region.WALLONIA_BRUSSELS,
    "bruxelles": Region.WALLONIA_BRUSSELS,
    "wallonia": Region.WALLONIA_BRUSSELS,
    "brussels": Region.WALLONIA_BRUSSELS,
    "wallonia_brussels": Region.WALLONIA_BRUSSELS,
    "flandre": Region.FLANDERS,
    "vlaanderen": Region.FLANDERS,
    "flanders": Region.FLANDERS,
}


def hp_to_kw(power_hp: float, hp_per_kw: float = 1.3596) -> float:
    return power_hp / hp_per_kw


def kw_to_hp(power_kw: float, hp_per_kw: float = 1.3596) -> int:
    """Display-only conversion; never a substitute for fiscal horsepower."""
    return round(power_kw * hp_per_kw)


def normalize_region(value: Region | str | None, default: Region) -> Region:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, Region):
        return value
    region = _REGION_ALIASES.get(value.strip().lower())
    if region is None:
        raise InvalidProfileError.for_field(
            "region",
            f"Unknown region {value!r}. Available: {sorted(_REGION_ALIASES)}",
        )
    return region


def profile_from_listing(
    record: Mapping[str, Any],
    region: Region | str | None = None,
    settings: Settings | None = None,
) -> VehicleTaxProfile:
    """Map a listing record onto a ``VehicleTaxProfile``.

    Args:
        record: Listing fields (``power_hp``, ``fiscal_horsepower``, ``co2``,
            ``co2_wltp``, ``year``, ``first_registration_date``,
            ``region_of_registration``, ``is_hybrid``, ``is_electric``).
        region: Region chosen by the buyer; overrides the listing's own.
        settings: Conversion defaults, read from the environment when omitted.

    Raises:
        InvalidProfileError: if the record cannot form a valid profile.
    """
    settings = settings or Settings()
    listing = settings.listing

    power_hp = record.get("power_hp") or 0
    co2 = record.get("co2")

    return VehicleTaxProfile(
        power_kw=hp_to_kw(power_hp, listing.hp_per_kw),
        fiscal_horsepower=record.get("fiscal_horsepower") or 0,
        co2_nedc=listing.missing_co2_gkm if co2 is None else co2,
        co2_wltp=record.get("co2_wltp"),
        registration_date=record.get("first_registration_date") or None,
        registration_year=record.get("year"),
        region=normalize_region(
            region if region is not None else record.get("region_of_registration"),
            settings.default_region,
        ),
        is_hybrid=bool(record.get("is_hybrid")),
        is_electric=bool(record.get("is_electric")),
    )
