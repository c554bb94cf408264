"""Apply every field normalizer to a draft."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from venuesync.domain.model import Category, ReviewFlag

from .address import normalize_address
from .category import map_category
from .contact import clean_description, normalize_phone, normalize_website
from .price import price_tier
from .rating import normalize_rating, normalize_review_count
from .text import normalize_name, normalize_tags

if TYPE_CHECKING:
    from venuesync.config.ingest import ImportConfig
    from venuesync.domain.model import VenueDraft

log = logging.getLogger(__name__)


def normalize_draft(draft: VenueDraft, config: ImportConfig) -> VenueDraft:
    """Return a normalized copy of ``draft``.

    Never raises and never mutates its input. Running it on its own output
    yields an equal draft.
    """

    flags = set(draft.review_flags)

    phone = normalize_phone(
        draft.phone,
        country_code=config.default_country_code,
        national_digits=config.national_number_digits,
    )
    if not phone.normalized:
        flags.add(ReviewFlag.PHONE_UNNORMALIZED)

    category = draft.category
    extra_tags: frozenset[str] = frozenset()
    if category is None or category is Category.UNCATEGORIZED:
        mapping = map_category(draft.source_categories, config.category_map)
        category = mapping.category
        extra_tags = mapping.tags
        if not mapping.mapped:
            flags.add(ReviewFlag.CATEGORY_UNMAPPED)

    tier = draft.price_tier
    if tier is None:
        tier = price_tier(draft.raw_price, config.price_table)

    normalized = replace(
        draft,
        name=normalize_name(draft.name),
        category=category,
        tags=normalize_tags(draft.tags | extra_tags),
        price_tier=tier,
        address=normalize_address(
            draft.address,
            bounds=config.neighborhoods,
            aliases=config.neighborhood_aliases,
            service_area=config.service_area,
        ),
        phone=phone.value,
        website=normalize_website(draft.website),
        description=clean_description(draft.description),
        image_url=normalize_website(draft.image_url),
        rating=normalize_rating(draft.rating),
        review_count=normalize_review_count(draft.review_count),
        review_flags=frozenset(flags),
    )
    if normalized.review_flags:
        log.debug(
            "Draft %s flagged for review: %s",
            draft.source,
            ", ".join(sorted(normalized.review_flags)),
        )
    return normalized
