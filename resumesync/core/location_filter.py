"""
Location matching for job listings.

Listing filters offer ASCII city names while postings are stored with
their Turkish spelling ("Istanbul" vs "İstanbul, Türkiye"). Filter values
are normalized through CITY_ALIASES before a case-insensitive substring
match against the posting location.
"""

import re
from typing import Iterable, Protocol, TypeVar

from resumesync.utils.logger import get_logger

logger = get_logger(__name__)

# ASCII spelling -> stored spelling
CITY_ALIASES: dict[str, str] = {
    "Istanbul": "İstanbul",
    "Izmir": "İzmir",
    "Eskisehir": "Eskişehir",
    "Canakkale": "Çanakkale",
    "Corum": "Çorum",
    "Mugla": "Muğla",
    "Sanliurfa": "Şanlıurfa",
    "Diyarbakir": "Diyarbakır",
    "Kirsehir": "Kırşehir",
    "Tekirdag": "Tekirdağ",
    "Usak": "Uşak",
    "Nigde": "Niğde",
}

_ALIASES_BY_KEY = {alias.casefold(): city for alias, city in CITY_ALIASES.items()}
_ALIAS_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(alias) for alias in CITY_ALIASES) + r")\b",
    re.IGNORECASE | re.ASCII,
)


class HasLocation(Protocol):
    location: str


T = TypeVar("T", bound=HasLocation)


def normalize_location(value: str) -> str:
    """Replace ASCII city names inside a filter value with their stored spelling."""
    return _ALIAS_PATTERN.sub(
        lambda m: _ALIASES_BY_KEY.get(m.group(0).casefold(), m.group(0)), value.strip()
    )


def location_matches(location: str, normalized: Iterable[str]) -> bool:
    haystack = (location or "").casefold()
    return any(needle.casefold() in haystack for needle in normalized)


def filter_by_locations(items: list[T], locations: list[str]) -> list[T]:
    """
    Keep items whose location contains any of the requested locations.

    An empty ``locations`` list keeps everything.
    """
    normalized = [normalize_location(loc) for loc in locations if loc and loc.strip()]
    if not normalized:
        return list(items)

    kept = [item for item in items if location_matches(item.location, normalized)]
    logger.debug(f"Location filter {normalized} kept {len(kept)} of {len(items)}")
    return kept
