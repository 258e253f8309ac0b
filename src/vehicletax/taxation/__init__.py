"""Belgian vehicle taxation engine.

Computes the one-time registration tax (TMC with age degressivity and
eco-malus) and the annual circulation tax for Wallonia/Brussels, and returns
an explicit "unsupported" report for Flanders.
"""

from vehicletax.taxation.engine import VehicleTaxEngine, calculate_taxes
from vehicletax.taxation.errors import InvalidProfileError
from vehicletax.taxation.models import (
    FlandersNotice,
    RegistrationTax,
    TaxReport,
    VehicleTaxProfile,
)
from vehicletax.taxation.tariffs import TariffBook, load_tariff_book

__all__ = [
    "FlandersNotice",
    "InvalidProfileError",
    "RegistrationTax",
    "TariffBook",
    "TaxReport",
    "VehicleTaxEngine",
    "VehicleTaxProfile",
    "calculate_taxes",
    "load_tariff_book",
]
