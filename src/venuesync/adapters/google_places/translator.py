"""Translate Google places into venue drafts."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Final

from venuesync.adapters.base import parse_item, split_full_address
from venuesync.domain.errors import ProviderSchemaMismatchError
from venuesync.domain.model import Address, Coordinates, Provider, SourceRef, VenueDraft

from .schema import Place

if TYPE_CHECKING:
    from collections.abc import Mapping

# Place types that name a cuisine or kind of venue worth keeping as a tag.
TYPE_TAGS: Final[dict[str, str]] = {
    "italian_restaurant": "Italian",
    "chinese_restaurant": "Chinese",
    "japanese_restaurant": "Japanese",
    "mexican_restaurant": "Mexican",
    "french_restaurant": "French",
    "indian_restaurant": "Indian",
    "thai_restaurant": "Thai",
    "korean_restaurant": "Korean",
    "vietnamese_restaurant": "Vietnamese",
    "spanish_restaurant": "Spanish",
    "greek_restaurant": "Mediterranean",
    "mediterranean_restaurant": "Mediterranean",
    "middle_eastern_restaurant": "Middle Eastern",
    "brazilian_restaurant": "Brazilian",
    "peruvian_restaurant": "Peruvian",
    "pizza_restaurant": "Pizza",
    "seafood_restaurant": "Seafood",
    "steak_house": "Steakhouse",
    "sushi_restaurant": "Sushi",
    "barbecue_restaurant": "BBQ",
    "hamburger_restaurant": "Burgers",
    "sandwich_shop": "Sandwiches",
    "american_restaurant": "American",
    "breakfast_restaurant": "Breakfast",
    "brunch_restaurant": "Brunch",
    "fast_food_restaurant": "Fast Food",
    "meal_takeaway": "Takeout",
    "bakery": "Bakery",
    "cafe": "Cafe",
    "bar": "Bar",
    "night_club": "Nightclub",
}


def translate_place(payload: Mapping[str, object]) -> VenueDraft:
    try:
        place = parse_item(Place, payload, Provider.GOOGLE_PLACES)
    except ProviderSchemaMismatchError as exc:
        place_id = payload.get("place_id")
        if exc.native_id is None and isinstance(place_id, str):
            exc.native_id = place_id
        raise
    return VenueDraft(
        source=SourceRef(Provider.GOOGLE_PLACES, place.place_id),
        name=place.name,
        source_categories=tuple(place.types),
        tags=frozenset(TYPE_TAGS[kind] for kind in place.types if kind in TYPE_TAGS),
        raw_price=price_label(place.price_level),
        address=_address(place),
        phone=place.formatted_phone_number,
        website=place.website,
        rating=place.rating,
        review_count=place.user_ratings_total,
    )


def price_label(level: int | None) -> str | None:
    """Google's 0..4 price level as a price table key."""

    if level is None:
        return None
    if level == 0:
        return "free"
    return "$" * level


def _address(place: Place) -> Address | None:
    address = split_full_address(place.formatted_address)
    location = place.geometry.location if place.geometry is not None else None
    if location is None:
        return address
    coordinates = Coordinates(location.lat, location.lng)
    if address is None:
        return Address(coordinates=coordinates)
    return replace(address, coordinates=coordinates)
