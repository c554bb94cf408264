"""Translate Miami Beach registry businesses into venue drafts."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from venuesync.adapters.base import parse_item, split_full_address, synthesize_native_id
from venuesync.domain.errors import ProviderSchemaMismatchError
from venuesync.domain.model import Address, Coordinates, Provider, SourceRef, VenueDraft

from .schema import RESTAURANT_DATATABLE, Business

if TYPE_CHECKING:
    from collections.abc import Mapping


def translate_business(payload: Mapping[str, object]) -> VenueDraft:
    business = parse_item(Business, payload, Provider.MIAMI_BEACH)
    address = split_full_address(business.prem_full_address)
    if business.lat is not None and business.lng is not None:
        coordinates = Coordinates(business.lat, business.lng)
        address = (
            Address(coordinates=coordinates)
            if address is None
            else replace(address, coordinates=coordinates)
        )

    native_id = business.datatable_entry_id or synthesize_native_id(
        business.display_name, address.street if address is not None else None
    )
    if native_id is None:
        raise ProviderSchemaMismatchError(
            Provider.MIAMI_BEACH, "business has no id, name or address"
        )

    restaurant = business.restaurant
    categories: list[str] = []
    if business.datatable_category_name:
        categories.append(business.datatable_category_name)
    if restaurant is not None:
        categories.append(RESTAURANT_DATATABLE)

    return VenueDraft(
        source=SourceRef(Provider.MIAMI_BEACH, native_id),
        name=business.display_name,
        source_categories=tuple(categories),
        tags=(
            frozenset({business.datatable_category_name})
            if business.datatable_category_name
            else frozenset()
        ),
        raw_price=restaurant.price_range_restaurant if restaurant is not None else None,
        address=address,
        phone=restaurant.telephone if restaurant is not None else None,
        website=business.website,
        description=business.description,
        image_url=business.image_url,
    )
