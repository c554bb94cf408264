"""Street address comparison keys and neighborhood lookup."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from .text import collapse_whitespace, fold_text

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from venuesync.config.ingest import NeighborhoodBounds
    from venuesync.domain.model import Address, Coordinates

_ABBREVIATIONS: dict[str, str] = {
    "st": "street",
    "str": "street",
    "rd": "road",
    "ave": "avenue",
    "av": "avenue",
    "blvd": "boulevard",
    "dr": "drive",
    "ln": "lane",
    "ct": "court",
    "pl": "place",
    "sq": "square",
    "ter": "terrace",
    "terr": "terrace",
    "hwy": "highway",
    "pkwy": "parkway",
    "cswy": "causeway",
    "cir": "circle",
    "ste": "suite",
    "apt": "apartment",
    "fl": "floor",
    "n": "north",
    "s": "south",
    "e": "east",
    "w": "west",
    "ne": "northeast",
    "nw": "northwest",
    "se": "southeast",
    "sw": "southwest",
}


def address_key(street: str | None) -> str | None:
    """Comparison key for a street line: casefolded, unpunctuated, abbreviations expanded."""

    folded = fold_text(street)
    if folded is None:
        return None
    return " ".join(_ABBREVIATIONS.get(word, word) for word in folded.split(" "))


def neighborhood_for(
    coordinates: Coordinates | None,
    bounds: Sequence[NeighborhoodBounds],
    *,
    service_area: NeighborhoodBounds | None = None,
) -> str | None:
    """Name the first box holding the point, else the service area when it holds it."""

    if coordinates is None:
        return None
    latitude, longitude = coordinates.latitude, coordinates.longitude
    for box in bounds:
        if box.contains(latitude, longitude):
            return box.name
    if service_area is not None and service_area.contains(latitude, longitude):
        return service_area.name
    return None


def standardize_neighborhood(
    value: str | None,
    *,
    aliases: Mapping[str, str],
    known: Sequence[str] = (),
) -> str | None:
    if value is None:
        return None
    text = collapse_whitespace(value)
    if not text:
        return None
    folded = text.casefold()
    if folded in aliases:
        return aliases[folded]
    for name in known:
        if name.casefold() == folded:
            return name
    return text


def normalize_address(
    address: Address | None,
    *,
    bounds: Sequence[NeighborhoodBounds] = (),
    aliases: Mapping[str, str] | None = None,
    service_area: NeighborhoodBounds | None = None,
) -> Address | None:
    """Return the address with trimmed parts, its comparison key and a neighborhood.

    The display street keeps the provider's abbreviations. A provider-supplied
    neighborhood is standardized through ``aliases``; otherwise one is derived
    from the coordinates. Points outside every box and outside ``service_area``
    get no neighborhood.
    """

    if address is None:
        return None
    street = _clean(address.street)
    key = address_key(street) if street else address.key
    neighborhood = standardize_neighborhood(
        address.neighborhood,
        aliases=aliases or {},
        known=[box.name for box in bounds],
    )
    if neighborhood is None:
        neighborhood = neighborhood_for(address.coordinates, bounds, service_area=service_area)
    normalized = replace(
        address,
        street=street,
        city=_clean(address.city),
        region=_clean(address.region),
        postal_code=_clean(address.postal_code),
        neighborhood=neighborhood,
        key=key,
    )
    parts = (
        street,
        key,
        normalized.city,
        normalized.region,
        normalized.postal_code,
        neighborhood,
    )
    if not any(parts) and normalized.coordinates is None:
        return None
    return normalized


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return collapse_whitespace(value) or None
