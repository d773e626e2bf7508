"""
Core listing logic for resumesync.

Submodules:
- location_filter: City alias normalization and location matching
"""

from .location_filter import CITY_ALIASES, filter_by_locations, normalize_location

__all__ = [
    "CITY_ALIASES",
    "filter_by_locations",
    "normalize_location",
]
