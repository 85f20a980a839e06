"""Directory: places search across Geoapify, HERE and Google with Nominatim geocoding."""

__version__ = "1.0.0"
