"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Provider(StrEnum):
    YELP = "yelp"
    TICKETMASTER = "ticketmaster"
    NPS = "nps"
    MIAMI_BEACH = "miami_beach"
    GOOGLE_PLACES = "google_places"


class Category(StrEnum):
    """Closed vocabulary every provider category is mapped into."""

    DINING = "dining"
    CULTURE = "culture"
    NATURE = "nature"
    EVENT = "event"
    NIGHTLIFE = "nightlife"
    ENTERTAINMENT = "entertainment"
    RECREATION = "recreation"
    SHOPPING = "shopping"
    UNCATEGORIZED = "uncategorized"


class RecordStatus(StrEnum):
    ACTIVE = "active"
    PENDING_REVIEW = "pending_review"
    ARCHIVED = "archived"


class ReviewFlag(StrEnum):
    """Low-confidence markers raised by normalization."""

    PHONE_UNNORMALIZED = "phone_unnormalized"
    CATEGORY_UNMAPPED = "category_unmapped"


class VenueField(StrEnum):
    """Fields whose provenance is tracked per stored venue."""

    NAME = "name"
    ADDRESS = "address"
    PHONE = "phone"
    WEBSITE = "website"
    PRICE_TIER = "price_tier"
    DESCRIPTION = "description"
    IMAGE_URL = "image_url"
    RATING = "rating"
    REVIEW_COUNT = "review_count"
