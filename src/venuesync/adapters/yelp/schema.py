"""Pydantic models describing the Yelp Fusion business search payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class YelpBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class YelpCategory(YelpBaseModel):
    alias: str
    title: str | None = None


class YelpCoordinates(YelpBaseModel):
    latitude: float | None = None
    longitude: float | None = None


class YelpLocation(YelpBaseModel):
    address1: str | None = None
    address2: str | None = None
    address3: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    display_address: list[str] = Field(default_factory=list)

    _normalize_parts = field_validator(
        "address1", "address2", "address3", "city", "state", "zip_code", mode="before"
    )(_blank_to_none)


class YelpBusiness(YelpBaseModel):
    id: str
    name: str | None = None
    url: str | None = None
    image_url: str | None = None
    phone: str | None = None
    price: str | None = None
    is_closed: bool = False
    rating: float | None = None
    review_count: int | None = None
    categories: list[YelpCategory] = Field(default_factory=list)
    coordinates: YelpCoordinates | None = None
    location: YelpLocation | None = None

    _normalize_optional = field_validator("phone", "price", "image_url", "url", mode="before")(
        _blank_to_none
    )


class YelpSearchResponse(YelpBaseModel):
    """Envelope only; businesses are validated one at a time by the translator."""

    businesses: list[dict[str, object]]
    total: int = 0
