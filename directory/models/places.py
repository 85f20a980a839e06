"""Pydantic models for Places."""
from dataclasses import dataclass
from pydantic import BaseModel, Field
from typing import Optional, List, FrozenSet


class Address(BaseModel):
    """Postal address of a place. Unknown parts are empty strings."""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""

    def one_line(self) -> str:
        """Join the known parts as "street, city, state zip, country"."""
        state_zip = " ".join(part.strip() for part in (self.state, self.zip) if part and part.strip())
        parts = [self.street, self.city, state_zip, self.country]
        return ", ".join(part.strip() for part in parts if part and part.strip())


class Poi(BaseModel):
    """A point of interest normalized from any provider."""
    name: str
    address: Address = Field(default_factory=Address)
    hours: List[str] = []
    phone: Optional[str] = None
    description: str = ""
    website: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    # Set when a provider ignored the radius hint (seen with HERE)
    is_outside_search_radius: bool = False


@dataclass(frozen=True)
class CategoryMapping:
    """Free-text synonyms that select one provider category query."""
    labels: FrozenSet[str]
    provider_categories: str

    def matches(self, query: str) -> bool:
        return query.strip().lower() in self.labels


class PoiDetails(BaseModel):
    """A place with the display strings the client renders."""
    poi: Poi
    address_text: str = ""
    display_phone: str = ""
    dial_phone: str = ""
    dial_uri: Optional[str] = None
    hours: List[str] = []
    map_query: Optional[str] = None


class Origin(BaseModel):
    """Coordinates a search was biased towards. (0, 0) means no bias."""
    lat: float = 0.0
    lon: float = 0.0


class SearchResponse(BaseModel):
    """Response model for place search."""
    query: str
    provider: str
    origin: Origin = Field(default_factory=Origin)
    places: List[Poi] = []
    total: int = 0


class AutocompleteResponse(BaseModel):
    """Suggestions for partially typed text."""
    query: str
    suggestions: List[str] = []


class PhoneFormatResponse(BaseModel):
    """A phone number in display and dialable form."""
    phone: str
    region: str
    display: str
    dial: str
    dial_uri: Optional[str] = None
