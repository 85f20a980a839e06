"""
Phone number formatting for places.

Numbers are formatted with libphonenumber (``phonenumbers``) using the region
of the country the place is in. Formatting never raises: when a number cannot
be parsed or is not valid, the cleaned input is returned as-is.
"""

import logging
from typing import Optional

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat

from directory.utils.regions import infer_region_code, region_calling_code

logger = logging.getLogger(__name__)

TEL_SCHEME = "tel:"


def _clean(raw_phone: Optional[str]) -> str:
    """Trim and drop a leading "tel:" scheme (HERE returns those)."""
    cleaned = (raw_phone or "").strip()
    if cleaned.lower().startswith(TEL_SCHEME):
        cleaned = cleaned[len(TEL_SCHEME):].strip()
    return cleaned


def _normalize_for_region(phone: str, region: str) -> str:
    """Add the missing "+" to international numbers written without it."""
    trimmed = phone.strip()
    if trimmed.startswith("+") or trimmed.startswith("00"):
        return trimmed

    digits = "".join(ch for ch in trimmed if ch.isdigit())
    # Too short to be a full international number
    if len(digits) < 8:
        return trimmed

    calling_code = region_calling_code(region)
    if calling_code > 0 and digits.startswith(str(calling_code)):
        return f"+{digits}"

    return trimmed


def _format(raw_phone: Optional[str], country: Optional[str], number_format: int) -> str:
    phone = _clean(raw_phone)
    if not phone:
        return ""

    region = infer_region_code(country)
    try:
        parsed = phonenumbers.parse(_normalize_for_region(phone, region), region)
    except NumberParseException as exc:
        logger.debug(f"Could not parse phone '{phone}' for region {region}: {exc}")
        return phone

    if not phonenumbers.is_valid_number(parsed):
        return phone
    return phonenumbers.format_number(parsed, number_format)


def format_phone_number_for_display(raw_phone: Optional[str], country: Optional[str]) -> str:
    """Format a phone number in the national format of the place's country."""
    return _format(raw_phone, country, PhoneNumberFormat.NATIONAL)


def format_phone_number_for_dial(raw_phone: Optional[str], country: Optional[str]) -> str:
    """
    Format a phone number as E.164 (e.g. "+494036810") for a dial action.

    Falls back to the cleaned input when the number is not valid.
    """
    return _format(raw_phone, country, PhoneNumberFormat.E164)


def dial_uri(raw_phone: Optional[str], country: Optional[str]) -> Optional[str]:
    """Build a tel: URI, or None when there is no number."""
    number = format_phone_number_for_dial(raw_phone, country)
    if not number:
        return None
    return f"{TEL_SCHEME}{number}"
