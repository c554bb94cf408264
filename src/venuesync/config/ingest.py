"""Import run configuration: provider priority and normalization tables.

The coordinator receives one ``ImportConfig`` at construction; nothing in the
pipeline reads these tables from module state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from venuesync.domain.model import Category, Provider

from .env import env_float

DEFAULT_FETCH_TIMEOUT_SECONDS: Final[float] = 60.0
DEFAULT_CANDIDATE_LIMIT: Final[int] = 200


@dataclass(slots=True, frozen=True)
class NeighborhoodBounds:
    name: str
    south: float
    north: float
    west: float
    east: float

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.south <= latitude <= self.north and self.west <= longitude <= self.east


# Points outside every neighborhood box but inside this one are still local.
DEFAULT_SERVICE_AREA: Final[NeighborhoodBounds] = NeighborhoodBounds(
    "Greater Miami", 24.40, 26.00, -82.00, -80.00
)

# First match wins, so nested boxes come before the boxes around them.
DEFAULT_NEIGHBORHOODS: Final[tuple[NeighborhoodBounds, ...]] = (
    NeighborhoodBounds("Key West", 24.40, 24.60, -82.00, -80.00),
    NeighborhoodBounds("Lower Keys", 24.60, 24.90, -82.00, -80.00),
    NeighborhoodBounds("Key Largo", 24.90, 25.00, -82.00, -80.00),
    NeighborhoodBounds("South Beach", 25.76, 25.80, -80.15, -80.11),
    NeighborhoodBounds("Mid-Beach", 25.80, 25.85, -80.15, -80.11),
    NeighborhoodBounds("North Beach", 25.85, 25.90, -80.15, -80.11),
    NeighborhoodBounds("Coral Gables", 25.72, 25.78, -80.30, -80.25),
    NeighborhoodBounds("Coconut Grove", 25.70, 25.76, -80.25, -80.20),
    NeighborhoodBounds("Brickell", 25.76, 25.77, -80.20, -80.18),
    NeighborhoodBounds("Downtown Miami", 25.77, 25.82, -80.20, -80.15),
    NeighborhoodBounds("Wynwood", 25.82, 25.88, -80.20, -80.15),
    NeighborhoodBounds("Little Havana", 25.76, 25.82, -80.25, -80.20),
    NeighborhoodBounds("Homestead", 25.40, 25.65, -80.55, -80.35),
    NeighborhoodBounds("Aventura", 25.88, 25.98, -80.20, -80.11),
    NeighborhoodBounds("Kendall", 25.65, 25.72, -80.40, -80.25),
    NeighborhoodBounds("Everglades", 25.00, 26.00, -81.50, -80.50),
)

DEFAULT_ADJACENT_NEIGHBORHOODS: Final[dict[str, tuple[str, ...]]] = {
    "South Beach": ("Mid-Beach",),
    "Mid-Beach": ("South Beach", "North Beach"),
    "North Beach": ("Mid-Beach", "Aventura"),
    "Downtown Miami": ("Brickell", "Wynwood", "Little Havana"),
    "Brickell": ("Downtown Miami", "Coconut Grove", "Little Havana"),
    "Wynwood": ("Downtown Miami",),
    "Little Havana": ("Downtown Miami", "Brickell", "Coral Gables"),
    "Coral Gables": ("Coconut Grove", "Little Havana", "Kendall"),
    "Coconut Grove": ("Coral Gables", "Brickell"),
    "Kendall": ("Coral Gables", "Homestead"),
    "Homestead": ("Kendall", "Everglades"),
    "Everglades": ("Homestead",),
    "Key Largo": ("Lower Keys",),
    "Lower Keys": ("Key Largo", "Key West"),
    "Key West": ("Lower Keys",),
    "Aventura": ("North Beach",),
}

# Spellings seen in provider feeds, keyed casefolded.
DEFAULT_NEIGHBORHOOD_ALIASES: Final[dict[str, str]] = {
    "sobe": "South Beach",
    "so beach": "South Beach",
    "south beach miami": "South Beach",
    "mid beach": "Mid-Beach",
    "middle beach": "Mid-Beach",
    "downtown": "Downtown Miami",
    "miami downtown": "Downtown Miami",
    "brickell key": "Brickell",
    "brickel": "Brickell",
    "financial district": "Brickell",
    "wynwood arts district": "Wynwood",
    "wynwod": "Wynwood",
    "calle ocho": "Little Havana",
    "the gables": "Coral Gables",
    "miracle mile": "Coral Gables",
    "the grove": "Coconut Grove",
    "cocowalk": "Coconut Grove",
}

DEFAULT_CATEGORY_MAP: Final[dict[str, Category]] = {
    # Yelp aliases
    "restaurants": Category.DINING,
    "food": Category.DINING,
    "icecream": Category.DINING,
    "cafes": Category.DINING,
    "steak": Category.DINING,
    "brazilian": Category.DINING,
    "seafood": Category.DINING,
    "nightlife": Category.NIGHTLIFE,
    "bars": Category.NIGHTLIFE,
    "cocktailbars": Category.NIGHTLIFE,
    "sportsbars": Category.NIGHTLIFE,
    "divebars": Category.NIGHTLIFE,
    "danceclubs": Category.NIGHTLIFE,
    "piano_bars": Category.NIGHTLIFE,
    "jazzandblues": Category.NIGHTLIFE,
    "musicvenues": Category.NIGHTLIFE,
    "karaoke": Category.NIGHTLIFE,
    "theaters": Category.ENTERTAINMENT,
    "comedyclubs": Category.ENTERTAINMENT,
    "movietheaters": Category.ENTERTAINMENT,
    "poolbilliards": Category.RECREATION,
    "bowling": Category.RECREATION,
    "arcades": Category.RECREATION,
    "amusementparks": Category.RECREATION,
    "mini_golf": Category.RECREATION,
    "lasertag": Category.RECREATION,
    "paintball": Category.RECREATION,
    "boating": Category.RECREATION,
    "fishing": Category.RECREATION,
    "watersports": Category.RECREATION,
    "diving": Category.RECREATION,
    "tours": Category.RECREATION,
    "active": Category.RECREATION,
    "arts": Category.CULTURE,
    "galleries": Category.CULTURE,
    "museums": Category.CULTURE,
    "performing_arts": Category.CULTURE,
    "landmarks": Category.CULTURE,
    "parks": Category.NATURE,
    "hiking": Category.NATURE,
    "beaches": Category.NATURE,
    "zoos": Category.NATURE,
    "aquariums": Category.NATURE,
    "gardens": Category.NATURE,
    "shopping": Category.SHOPPING,
    # Ticketmaster segments
    "music": Category.EVENT,
    "sports": Category.EVENT,
    "arts & theatre": Category.EVENT,
    "film": Category.EVENT,
    "miscellaneous": Category.EVENT,
    # NPS designations
    "national park": Category.NATURE,
    "national preserve": Category.NATURE,
    "national seashore": Category.NATURE,
    "national monument": Category.CULTURE,
    "national memorial": Category.CULTURE,
    "national historic site": Category.CULTURE,
    # Miami Beach registry
    "restaurant-bars": Category.DINING,
    "restaurants & bars": Category.DINING,
    "attractions": Category.CULTURE,
    "retail": Category.SHOPPING,
    # Google place types
    "restaurant": Category.DINING,
    "cafe": Category.DINING,
    "bakery": Category.DINING,
    "meal_takeaway": Category.DINING,
    "meal_delivery": Category.DINING,
    "bar": Category.NIGHTLIFE,
    "night_club": Category.NIGHTLIFE,
    "museum": Category.CULTURE,
    "art_gallery": Category.CULTURE,
    "tourist_attraction": Category.CULTURE,
    "park": Category.NATURE,
    "aquarium": Category.NATURE,
    "zoo": Category.NATURE,
    "amusement_park": Category.RECREATION,
    "bowling_alley": Category.RECREATION,
    "movie_theater": Category.ENTERTAINMENT,
    "casino": Category.ENTERTAINMENT,
    "shopping_mall": Category.SHOPPING,
}

DEFAULT_PRICE_TABLE: Final[dict[str, int]] = {
    "$": 1,
    "$$": 2,
    "$$$": 3,
    "$$$$": 4,
    "$$$$$": 5,
    "1": 1,
    "2": 2,
    "3": 3,
    "4": 4,
    "5": 5,
    "free": 1,
    "cheap": 1,
    "inexpensive": 1,
    "budget": 1,
    "moderate": 2,
    "mid-range": 3,
    "expensive": 3,
    "upscale": 4,
    "very expensive": 4,
    "luxury": 5,
}

# Parks and gardens never exceed a mid-range tier in any provider feed.
DEFAULT_PRICE_TIER_RANGES: Final[dict[Category, tuple[int, int]]] = {
    Category.NATURE: (1, 3),
}

DEFAULT_PROVIDER_PRIORITY: Final[tuple[Provider, ...]] = (
    Provider.NPS,
    Provider.MIAMI_BEACH,
    Provider.GOOGLE_PLACES,
    Provider.YELP,
    Provider.TICKETMASTER,
)


@dataclass(frozen=True, kw_only=True)
class ImportConfig:
    """Everything an import run needs besides adapters and the store."""

    provider_priority: tuple[Provider, ...] = DEFAULT_PROVIDER_PRIORITY
    category_map: Mapping[str, Category] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_MAP)
    )
    price_table: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_PRICE_TABLE))
    price_tier_ranges: Mapping[Category, tuple[int, int]] = field(
        default_factory=lambda: dict(DEFAULT_PRICE_TIER_RANGES)
    )
    neighborhoods: tuple[NeighborhoodBounds, ...] = DEFAULT_NEIGHBORHOODS
    adjacent_neighborhoods: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_ADJACENT_NEIGHBORHOODS)
    )
    neighborhood_aliases: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_NEIGHBORHOOD_ALIASES)
    )
    service_area: NeighborhoodBounds | None = DEFAULT_SERVICE_AREA
    default_country_code: str = "1"
    national_number_digits: int = 10
    fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT

    def priority_of(self, provider: Provider | None) -> int:
        """Rank a provider; higher wins. Unlisted providers rank lowest."""

        if provider is None or provider not in self.provider_priority:
            return -1
        return len(self.provider_priority) - self.provider_priority.index(provider)

    def neighbors_of(self, neighborhood: str) -> frozenset[str]:
        """Return the neighborhood plus every neighborhood adjacent in either direction."""

        related = {neighborhood, *self.adjacent_neighborhoods.get(neighborhood, ())}
        for name, adjacent in self.adjacent_neighborhoods.items():
            if neighborhood in adjacent:
                related.add(name)
        return frozenset(related)


def get_import_config() -> ImportConfig:
    return ImportConfig(
        fetch_timeout_seconds=env_float(
            "VENUESYNC_FETCH_TIMEOUT_SECONDS", DEFAULT_FETCH_TIMEOUT_SECONDS
        ),
    )
