"""Pydantic models describing Google Places Text Search payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class PlacesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LatLng(PlacesBaseModel):
    lat: float
    lng: float


class Geometry(PlacesBaseModel):
    location: LatLng | None = None


class Place(PlacesBaseModel):
    place_id: str
    name: str | None = None
    formatted_address: str | None = None
    geometry: Geometry | None = None
    types: list[str] = Field(default_factory=list)
    price_level: int | None = Field(default=None, ge=0, le=4)
    rating: float | None = None
    user_ratings_total: int | None = None
    business_status: str | None = None
    formatted_phone_number: str | None = None
    website: str | None = None

    _normalize_optional = field_validator(
        "name", "formatted_address", "formatted_phone_number", "website", mode="before"
    )(_blank_to_none)


class TextSearchResponse(PlacesBaseModel):
    """Envelope only; places are validated one at a time by the translator."""

    status: str
    results: list[dict[str, object]] = Field(default_factory=list)
    next_page_token: str | None = None
    error_message: str | None = None
