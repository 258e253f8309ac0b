"""Adapters that turn external vehicle records into tax profiles."""

from vehicletax.intake.listing import hp_to_kw, kw_to_hp, profile_from_listing

__all__ = ["hp_to_kw", "kw_to_hp", "profile_from_listing"]
