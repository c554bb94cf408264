"""Translate NPS parks into venue drafts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from venuesync.adapters.base import parse_item
from venuesync.domain.model import Address, Coordinates, Provider, SourceRef, VenueDraft

from .schema import Park, ParkAddress

if TYPE_CHECKING:
    from collections.abc import Mapping


def translate_park(payload: Mapping[str, object]) -> VenueDraft:
    park = parse_item(Park, payload, Provider.NPS)
    return VenueDraft(
        source=SourceRef(Provider.NPS, park.id),
        name=park.full_name,
        source_categories=(park.designation,) if park.designation else (),
        tags=frozenset(activity.name for activity in park.activities),
        raw_price=_lowest_fee(park),
        address=_address(park),
        phone=_voice_number(park),
        website=park.url,
        description=park.description,
        image_url=park.images[0].url if park.images else None,
    )


def _address(park: Park) -> Address | None:
    coordinates = None
    if park.latitude is not None and park.longitude is not None:
        coordinates = Coordinates(park.latitude, park.longitude)
    chosen: ParkAddress | None = next(
        (address for address in park.addresses if address.is_physical),
        park.addresses[0] if park.addresses else None,
    )
    if chosen is None:
        return Address(coordinates=coordinates) if coordinates else None
    return Address(
        street=chosen.line1,
        city=chosen.city,
        region=chosen.state_code,
        postal_code=chosen.postal_code,
        coordinates=coordinates,
    )


def _voice_number(park: Park) -> str | None:
    if park.contacts is None:
        return None
    numbers = [number for number in park.contacts.phone_numbers if number.phone_number]
    for number in numbers:
        if (number.type or "").casefold() == "voice":
            return number.phone_number
    return numbers[0].phone_number if numbers else None


def _lowest_fee(park: Park) -> float | None:
    costs = [fee.cost for fee in park.entrance_fees if fee.cost is not None]
    return min(costs) if costs else None
