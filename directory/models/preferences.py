"""Pydantic models for user search preferences."""
from pydantic import BaseModel, Field
from typing import Literal, Optional


class Preferences(BaseModel):
    """Search preferences saved per user."""
    search_radius: float = Field(5.0, gt=0, description="Search radius in miles")
    use_device_location: bool = Field(
        True, description="Bias searches by the device location instead of default_location"
    )
    default_location: Optional[str] = Field(
        None, description="Free-text place geocoded when the device location is not used"
    )
    top_level_category: Optional[str] = Field(
        None, description="Geoapify top-level category for free-text searches, e.g. catering"
    )
    places_provider: Optional[Literal["geoapify", "here", "google"]] = Field(
        None, description="Overrides the server's default places provider"
    )
