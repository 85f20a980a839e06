"""
Region inference for phone formatting.

Providers report the country of a place in different shapes ("DE", "DEU",
"Germany", "Deutschland"). Phone parsing needs an ISO 3166-1 alpha-2 code, so
this module maps whatever we got to one. It is a best-effort heuristic: the
first match wins and anything unknown resolves to "US".
"""

import locale
import logging
from functools import lru_cache
from typing import Dict, Optional

import phonenumbers
import pycountry

from directory.config import settings

logger = logging.getLogger(__name__)

FALLBACK_REGION = "US"

COMMON_NAME_TO_CODE = {
    "united states": "US",
    "usa": "US",
    "us": "US",
    "canada": "CA",
    "united kingdom": "GB",
    "uk": "GB",
    "germany": "DE",
    "deutschland": "DE",
}


@lru_cache(maxsize=1)
def _alpha3_to_alpha2() -> Dict[str, str]:
    return {country.alpha_3: country.alpha_2 for country in pycountry.countries}


@lru_cache(maxsize=1)
def _name_to_alpha2() -> Dict[str, str]:
    """Lower-cased country names (short, common and official) to alpha-2."""
    names: Dict[str, str] = {}
    for country in pycountry.countries:
        for attr in ("name", "common_name", "official_name"):
            value = getattr(country, attr, None)
            if value:
                names.setdefault(value.lower(), country.alpha_2)
    return names


def _default_locale_region() -> Optional[str]:
    """Region part of the process locale, e.g. "DE" for de_DE.UTF-8."""
    try:
        language_code = locale.getlocale()[0]
    except ValueError:
        return None
    if not language_code or "_" not in language_code:
        return None
    region = language_code.split("_", 1)[1].split(".", 1)[0].split("@", 1)[0]
    if len(region) == 2 and region.isalpha():
        return region.upper()
    return None


def default_region() -> str:
    """Region used when a place has no country at all."""
    return _default_locale_region() or settings.default_region or FALLBACK_REGION


def infer_region_code(country: Optional[str]) -> str:
    """
    Infer an ISO 3166-1 alpha-2 region code from a country name or code.

    Args:
        country: Alpha-2 or alpha-3 code, or a country name in any case

    Returns:
        Upper-case alpha-2 code; "US" when nothing matches
    """
    if country is None or not country.strip():
        return default_region()

    trimmed = country.strip()

    # Already an alpha-2 code
    if len(trimmed) == 2 and trimmed.isalpha():
        return trimmed.upper()

    if len(trimmed) == 3 and trimmed.isalpha():
        alpha2 = _alpha3_to_alpha2().get(trimmed.upper())
        if alpha2:
            return alpha2

    normalized = trimmed.lower()

    common = COMMON_NAME_TO_CODE.get(normalized)
    if common:
        return common

    match = _name_to_alpha2().get(normalized)
    if match:
        return match

    logger.debug(f"No region found for country '{trimmed}', using {FALLBACK_REGION}")
    return FALLBACK_REGION


def region_calling_code(region: str) -> int:
    """International calling code for a region, 0 when unknown."""
    return phonenumbers.country_code_for_region(region)
