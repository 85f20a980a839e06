"""Utility functions for the backend."""

from directory.utils.address import format_address, normalize_street, normalize_street_in_address
from directory.utils.hours import format_hour, format_hours
from directory.utils.normalizers import normalize_poi_details, normalize_pois
from directory.utils.phone import format_phone_number_for_dial, format_phone_number_for_display
from directory.utils.regions import infer_region_code

__all__ = [
    "format_address",
    "format_hour",
    "format_hours",
    "format_phone_number_for_dial",
    "format_phone_number_for_display",
    "infer_region_code",
    "normalize_poi_details",
    "normalize_pois",
    "normalize_street",
    "normalize_street_in_address",
]
