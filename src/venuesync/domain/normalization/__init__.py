"""Pure field normalizers for provider drafts."""

from __future__ import annotations

from .address import address_key, neighborhood_for, normalize_address, standardize_neighborhood
from .category import CategoryResult, map_category
from .contact import PhoneResult, clean_description, normalize_phone, normalize_website
from .draft import normalize_draft
from .price import price_tier, tier_from_amount
from .rating import normalize_rating, normalize_review_count
from .text import contains_words, fold_text, name_key, normalize_name, normalize_tags

__all__ = [
    "CategoryResult",
    "PhoneResult",
    "address_key",
    "clean_description",
    "contains_words",
    "fold_text",
    "map_category",
    "name_key",
    "neighborhood_for",
    "normalize_address",
    "normalize_draft",
    "normalize_name",
    "normalize_phone",
    "normalize_rating",
    "normalize_review_count",
    "normalize_tags",
    "normalize_website",
    "price_tier",
    "standardize_neighborhood",
    "tier_from_amount",
]
