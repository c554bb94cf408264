"""Pydantic models describing the Ticketmaster Discovery API event search."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class TicketmasterBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamedRef(TicketmasterBaseModel):
    name: str | None = None

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)


class Classification(TicketmasterBaseModel):
    segment: NamedRef | None = None
    genre: NamedRef | None = None
    sub_genre: NamedRef | None = Field(default=None, alias="subGenre")


class PriceRange(TicketmasterBaseModel):
    min: float | None = None
    max: float | None = None
    currency: str | None = None


class Image(TicketmasterBaseModel):
    url: str
    width: int | None = None


class VenueAddress(TicketmasterBaseModel):
    line1: str | None = None
    line2: str | None = None


class VenueState(TicketmasterBaseModel):
    name: str | None = None
    state_code: str | None = Field(default=None, alias="stateCode")


class VenueLocation(TicketmasterBaseModel):
    latitude: float | None = None
    longitude: float | None = None

    _normalize_coordinates = field_validator("latitude", "longitude", mode="before")(
        _blank_to_none
    )


class Venue(TicketmasterBaseModel):
    id: str | None = None
    name: str | None = None
    url: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    address: VenueAddress | None = None
    city: NamedRef | None = None
    state: VenueState | None = None
    location: VenueLocation | None = None
    images: list[Image] = Field(default_factory=list)


class EventEmbedded(TicketmasterBaseModel):
    venues: list[Venue] = Field(default_factory=list)


class Event(TicketmasterBaseModel):
    id: str
    name: str | None = None
    url: str | None = None
    info: str | None = None
    images: list[Image] = Field(default_factory=list)
    classifications: list[Classification] = Field(default_factory=list)
    price_ranges: list[PriceRange] = Field(default_factory=list, alias="priceRanges")
    embedded: EventEmbedded | None = Field(default=None, alias="_embedded")


class Page(TicketmasterBaseModel):
    size: int
    total_elements: int = Field(alias="totalElements")
    total_pages: int = Field(alias="totalPages")
    number: int


class SearchEmbedded(TicketmasterBaseModel):
    events: list[dict[str, object]] = Field(default_factory=list)


class EventSearchResponse(TicketmasterBaseModel):
    """Envelope; ``_embedded`` is omitted entirely when a page has no events."""

    page: Page
    embedded: SearchEmbedded | None = Field(default=None, alias="_embedded")

    @property
    def events(self) -> list[dict[str, object]]:
        return self.embedded.events if self.embedded is not None else []
