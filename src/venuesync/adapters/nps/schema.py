"""Pydantic models describing the National Park Service ``/parks`` payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class NpsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ParkAddress(NpsBaseModel):
    type: str | None = None
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state_code: str | None = Field(default=None, alias="stateCode")
    postal_code: str | None = Field(default=None, alias="postalCode")

    _normalize_parts = field_validator(
        "line1", "line2", "city", "state_code", "postal_code", mode="before"
    )(_blank_to_none)

    @property
    def is_physical(self) -> bool:
        return (self.type or "").casefold() == "physical"


class PhoneNumber(NpsBaseModel):
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    type: str | None = None


class Contacts(NpsBaseModel):
    phone_numbers: list[PhoneNumber] = Field(default_factory=list, alias="phoneNumbers")


class EntranceFee(NpsBaseModel):
    cost: float | None = None
    title: str | None = None

    _normalize_cost = field_validator("cost", mode="before")(_blank_to_none)


class NamedItem(NpsBaseModel):
    name: str


class ParkImage(NpsBaseModel):
    url: str


class Park(NpsBaseModel):
    id: str
    full_name: str | None = Field(default=None, alias="fullName")
    park_code: str | None = Field(default=None, alias="parkCode")
    url: str | None = None
    description: str | None = None
    designation: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    addresses: list[ParkAddress] = Field(default_factory=list)
    contacts: Contacts | None = None
    entrance_fees: list[EntranceFee] = Field(default_factory=list, alias="entranceFees")
    activities: list[NamedItem] = Field(default_factory=list)
    images: list[ParkImage] = Field(default_factory=list)

    _normalize_optional = field_validator(
        "latitude", "longitude", "designation", "url", "description", mode="before"
    )(_blank_to_none)


class ParksResponse(NpsBaseModel):
    """Envelope; counters arrive as strings."""

    total: int
    limit: int | None = None
    start: int | None = None
    data: list[dict[str, object]]
