"""Translate Ticketmaster events into venue drafts.

Each event is reduced to the venue hosting it (``_embedded.venues[0]``), so
repeated events at one venue collapse onto one source reference. Event
classifications become the venue's category terms and tags, and the lowest
advertised ticket price stands in for the price level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from venuesync.adapters.base import parse_item, synthesize_native_id
from venuesync.domain.errors import ProviderSchemaMismatchError
from venuesync.domain.model import Address, Coordinates, Provider, SourceRef, VenueDraft

from .schema import Event, Venue

if TYPE_CHECKING:
    from collections.abc import Mapping


def translate_event(payload: Mapping[str, object]) -> VenueDraft:
    event = parse_item(Event, payload, Provider.TICKETMASTER)
    venue = _first_venue(event)
    street = venue.address.line1 if venue.address is not None else None
    native_id = venue.id or synthesize_native_id(venue.name, street)
    if native_id is None:
        raise ProviderSchemaMismatchError(
            Provider.TICKETMASTER,
            "event venue carries neither an id nor a name or address",
            native_id=event.id,
        )

    segments: list[str] = []
    tags: set[str] = set()
    for classification in event.classifications:
        if classification.segment is not None and classification.segment.name:
            segments.append(classification.segment.name)
            tags.add(classification.segment.name)
        for ref in (classification.genre, classification.sub_genre):
            if ref is not None and ref.name and ref.name != "Undefined":
                tags.add(ref.name)

    return VenueDraft(
        source=SourceRef(Provider.TICKETMASTER, native_id),
        name=venue.name,
        source_categories=tuple(segments),
        tags=frozenset(tags),
        raw_price=_lowest_price(event),
        address=_address(venue, street),
        website=venue.url,
        image_url=_widest_image(venue),
    )


def _first_venue(event: Event) -> Venue:
    if event.embedded is None or not event.embedded.venues:
        raise ProviderSchemaMismatchError(
            Provider.TICKETMASTER, "event has no venue", native_id=event.id
        )
    return event.embedded.venues[0]


def _lowest_price(event: Event) -> float | None:
    minimums = [price.min for price in event.price_ranges if price.min is not None]
    return min(minimums) if minimums else None


def _widest_image(venue: Venue) -> str | None:
    if not venue.images:
        return None
    return max(venue.images, key=lambda image: image.width or 0).url


def _address(venue: Venue, street: str | None) -> Address | None:
    coordinates = None
    location = venue.location
    if location is not None and location.latitude is not None and location.longitude is not None:
        coordinates = Coordinates(location.latitude, location.longitude)
    city = venue.city.name if venue.city is not None else None
    region = venue.state.state_code if venue.state is not None else None
    if not any((street, city, region, venue.postal_code, coordinates)):
        return None
    return Address(
        street=street,
        city=city,
        region=region,
        postal_code=venue.postal_code,
        coordinates=coordinates,
    )
