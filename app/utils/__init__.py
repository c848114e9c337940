"""Utility functions for the backend."""

from app.utils.normalizers import map_legacy_place, map_new_place, map_provider_place

__all__ = ["map_legacy_place", "map_new_place", "map_provider_place"]
