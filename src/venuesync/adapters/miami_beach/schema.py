"""Pydantic models describing the Miami Beach business registry payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

RESTAURANT_DATATABLE = "restaurant-bars"


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class MiamiBeachBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RestaurantDatatable(MiamiBeachBaseModel):
    telephone: str | None = None
    price_range_restaurant: str | None = None

    _normalize_optional = field_validator("telephone", "price_range_restaurant", mode="before")(
        _blank_to_none
    )


class Business(MiamiBeachBaseModel):
    datatable_entry_id: str | None = None
    bus_name: str | None = None
    name: str | None = None
    prem_full_address: str | None = None
    lat: float | None = None
    lng: float | None = None
    website: str | None = None
    image_url: str | None = None
    description: str | None = None
    datatable_category_name: str | None = None
    datatables: dict[str, object] = Field(default_factory=dict)

    _normalize_optional = field_validator(
        "bus_name",
        "name",
        "prem_full_address",
        "lat",
        "lng",
        "website",
        "image_url",
        "description",
        "datatable_category_name",
        mode="before",
    )(_blank_to_none)

    @field_validator("datatable_entry_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return _blank_to_none(value)

    @field_validator("datatables", mode="before")
    @classmethod
    def _drop_empty_datatables(cls, value: object) -> object:
        # The registry sends [] instead of {} for businesses without datatables.
        if isinstance(value, list) or value is None:
            return {}
        return value

    @property
    def display_name(self) -> str | None:
        return self.bus_name or self.name

    @property
    def restaurant(self) -> RestaurantDatatable | None:
        table = self.datatables.get(RESTAURANT_DATATABLE)
        if not isinstance(table, dict):
            return None
        return RestaurantDatatable.model_validate(table)


class BusinessSearchResponse(MiamiBeachBaseModel):
    businesses: list[dict[str, object]] = Field(default_factory=list)
