"""Configuration settings for the application."""
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Places providers (an empty key disables that provider)
    geoapify_api_key: Optional[str] = None
    here_api_key: Optional[str] = None
    google_places_api_key: Optional[str] = None

    # Active provider: geoapify, here or google
    places_provider: str = "geoapify"
    places_result_limit: int = 30

    # Nominatim (OpenStreetMap) geocoding
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "directory-search/1.0"

    # Outbound HTTP timeouts in seconds
    http_timeout: float = 10.0
    http_connect_timeout: float = 5.0

    # Redis Configuration (user preferences)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None

    # Preference defaults for users who never saved any
    default_search_radius_miles: float = 5.0
    default_use_device_location: bool = True
    default_location: Optional[str] = None

    # Region used for phone formatting when the locale gives none
    default_region: str = "US"

    # FastAPI Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = True

    # CORS Configuration
    frontend_url: str = "http://localhost:3000"

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
