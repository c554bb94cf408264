"""Translate Yelp businesses into venue drafts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from venuesync.adapters.base import parse_item
from venuesync.domain.model import Address, Coordinates, Provider, SourceRef, VenueDraft

from .schema import YelpBusiness

if TYPE_CHECKING:
    from collections.abc import Mapping


def translate_business(payload: Mapping[str, object]) -> VenueDraft:
    business = parse_item(YelpBusiness, payload, Provider.YELP)
    return VenueDraft(
        source=SourceRef(Provider.YELP, business.id),
        name=business.name,
        source_categories=tuple(category.alias for category in business.categories),
        tags=frozenset(category.title for category in business.categories if category.title),
        raw_price=business.price,
        address=_address(business),
        phone=business.phone,
        website=business.url,
        image_url=business.image_url,
        rating=business.rating,
        review_count=business.review_count,
    )


def _address(business: YelpBusiness) -> Address | None:
    location = business.location
    coordinates = None
    if (
        business.coordinates is not None
        and business.coordinates.latitude is not None
        and business.coordinates.longitude is not None
    ):
        coordinates = Coordinates(business.coordinates.latitude, business.coordinates.longitude)
    if location is None:
        return Address(coordinates=coordinates) if coordinates else None
    street = location.address1
    if street is None and location.display_address:
        street = location.display_address[0]
    return Address(
        street=street,
        city=location.city,
        region=location.state,
        postal_code=location.zip_code,
        coordinates=coordinates,
    )
