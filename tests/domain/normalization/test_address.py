from __future__ import annotations

from venuesync.config.ingest import (
    DEFAULT_NEIGHBORHOOD_ALIASES,
    DEFAULT_NEIGHBORHOODS,
    DEFAULT_SERVICE_AREA,
)
from venuesync.domain.model import Address, Coordinates
from venuesync.domain.normalization import (
    address_key,
    neighborhood_for,
    normalize_address,
    standardize_neighborhood,
)

SOUTH_BEACH = Coordinates(25.78, -80.13)
DOWNTOWN = Coordinates(25.80, -80.19)


def test_address_key_expands_abbreviations() -> None:
    assert address_key("123 Collins Ave.") == "123 collins avenue"
    assert address_key("123 collins avenue") == "123 collins avenue"
    assert address_key("2500 NW 2nd St") == "2500 northwest 2nd street"


def test_address_key_of_blank_street_is_absent() -> None:
    assert address_key(None) is None
    assert address_key(" , ") is None


def test_neighborhood_for_uses_first_matching_box() -> None:
    assert neighborhood_for(SOUTH_BEACH, DEFAULT_NEIGHBORHOODS) == "South Beach"
    assert neighborhood_for(DOWNTOWN, DEFAULT_NEIGHBORHOODS) == "Downtown Miami"


def test_neighborhood_for_uses_service_area_outside_every_box() -> None:
    miami_gardens = Coordinates(25.93, -80.30)

    assert (
        neighborhood_for(miami_gardens, DEFAULT_NEIGHBORHOODS, service_area=DEFAULT_SERVICE_AREA)
        == "Greater Miami"
    )
    assert neighborhood_for(None, DEFAULT_NEIGHBORHOODS, service_area=DEFAULT_SERVICE_AREA) is None


def test_neighborhood_for_leaves_points_outside_service_area_blank() -> None:
    orlando = Coordinates(28.54, -81.38)

    assert (
        neighborhood_for(orlando, DEFAULT_NEIGHBORHOODS, service_area=DEFAULT_SERVICE_AREA)
        is None
    )
    assert neighborhood_for(Coordinates(25.93, -80.30), DEFAULT_NEIGHBORHOODS) is None


def test_standardize_neighborhood_applies_aliases_and_known_names() -> None:
    known = [box.name for box in DEFAULT_NEIGHBORHOODS]

    assert (
        standardize_neighborhood(" SoBe ", aliases=DEFAULT_NEIGHBORHOOD_ALIASES, known=known)
        == "South Beach"
    )
    assert (
        standardize_neighborhood("wynwood", aliases=DEFAULT_NEIGHBORHOOD_ALIASES, known=known)
        == "Wynwood"
    )
    assert (
        standardize_neighborhood("Bay Harbor", aliases=DEFAULT_NEIGHBORHOOD_ALIASES, known=known)
        == "Bay Harbor"
    )


def test_normalize_address_derives_key_and_neighborhood() -> None:
    address = Address(street=" 123  Collins Ave ", city=" Miami Beach", coordinates=SOUTH_BEACH)

    normalized = normalize_address(
        address,
        bounds=DEFAULT_NEIGHBORHOODS,
        aliases=DEFAULT_NEIGHBORHOOD_ALIASES,
        service_area=DEFAULT_SERVICE_AREA,
    )

    assert normalized is not None
    assert normalized.street == "123 Collins Ave"
    assert normalized.city == "Miami Beach"
    assert normalized.key == "123 collins avenue"
    assert normalized.neighborhood == "South Beach"


def test_normalize_address_prefers_provider_neighborhood() -> None:
    address = Address(street="1 Ocean Dr", neighborhood="sobe", coordinates=DOWNTOWN)

    normalized = normalize_address(
        address, bounds=DEFAULT_NEIGHBORHOODS, aliases=DEFAULT_NEIGHBORHOOD_ALIASES
    )

    assert normalized is not None
    assert normalized.neighborhood == "South Beach"


def test_normalize_address_is_idempotent() -> None:
    address = Address(street="123 Collins Ave", coordinates=SOUTH_BEACH)
    kwargs = {
        "bounds": DEFAULT_NEIGHBORHOODS,
        "aliases": DEFAULT_NEIGHBORHOOD_ALIASES,
        "service_area": DEFAULT_SERVICE_AREA,
    }

    once = normalize_address(address, **kwargs)  # type: ignore[arg-type]

    assert normalize_address(once, **kwargs) == once  # type: ignore[arg-type]


def test_normalize_address_drops_empty_addresses() -> None:
    assert normalize_address(Address(street="  ", city="")) is None
    assert normalize_address(None) is None


def test_normalize_address_outside_service_area_has_no_neighborhood() -> None:
    address = Address(
        street="100 S Orange Ave", city="Orlando", coordinates=Coordinates(28.54, -81.38)
    )

    normalized = normalize_address(
        address, bounds=DEFAULT_NEIGHBORHOODS, service_area=DEFAULT_SERVICE_AREA
    )

    assert normalized is not None
    assert normalized.neighborhood is None
    assert normalized.key == "100 south orange avenue"
