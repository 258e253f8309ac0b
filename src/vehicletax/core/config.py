"""Engine configuration loaded from the environment."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from vehicletax.core.types import Region


class TariffConfig(BaseSettings):
    """Tariff book location."""

    model_config = {"env_prefix": "VEHICLETAX_TARIFFS_"}

    path: str | None = None


class ListingConfig(BaseSettings):
    """Conversion defaults used when building profiles from listing records."""

    model_config = {"env_prefix": "VEHICLETAX_LISTING_"}

    hp_per_kw: float = Field(default=1.3596, gt=0)
    missing_co2_gkm: float = Field(default=200.0, ge=0)


class Settings(BaseSettings):
    """Root engine settings."""

    model_config = {"env_prefix": "VEHICLETAX_"}

    environment: str = "development"
    default_region: Region = Region.WALLONIA_BRUSSELS

    tariffs: TariffConfig = Field(default_factory=TariffConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)
