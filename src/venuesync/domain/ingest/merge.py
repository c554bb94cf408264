"""Field-level merge of a draft into a matched venue.

Each stored field remembers which provider supplied it. A draft may fill an
empty field, and may replace a populated one only when its provider ranks
above the field's provider. A provider may also refresh a field it supplied
itself. Fields without a provider were entered by hand and are left alone.

A value the normalizer flagged for review never replaces a populated field.
When it fills an empty one the flag travels with it and an active venue goes
back to review. A clean value replacing a flagged one clears the flag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from venuesync.domain.model import (
    Category,
    FieldPatch,
    RecordStatus,
    ReviewFlag,
    VenueField,
    is_blank,
)

if TYPE_CHECKING:
    from venuesync.config.ingest import ImportConfig
    from venuesync.domain.model import Provider, StoredVenue, VenueDraft

_FIELD_FLAGS: Final[dict[VenueField, ReviewFlag]] = {
    VenueField.PHONE: ReviewFlag.PHONE_UNNORMALIZED,
}


def build_patch(stored: StoredVenue, draft: VenueDraft, config: ImportConfig) -> FieldPatch:
    values: dict[VenueField, object] = {}
    field_sources: dict[VenueField, Provider] = {}
    flags = set(stored.review_flags)
    for venue_field in VenueField:
        incoming = draft.value_of(venue_field)
        if is_blank(incoming):
            continue
        flag = _FIELD_FLAGS.get(venue_field)
        flagged = flag is not None and flag in draft.review_flags
        current = stored.value_of(venue_field)
        if not is_blank(current):
            if current == incoming or flagged:
                continue
            if not _may_replace(stored.source_of(venue_field), draft.provider, config):
                continue
        values[venue_field] = incoming
        field_sources[venue_field] = draft.provider
        if flag is not None:
            if flagged:
                flags.add(flag)
            else:
                flags.discard(flag)

    tags = stored.tags | draft.tags
    category = None
    if stored.category is Category.UNCATEGORIZED:
        if draft.category not in (None, Category.UNCATEGORIZED):
            category = draft.category
            flags.discard(ReviewFlag.CATEGORY_UNMAPPED)
        elif ReviewFlag.CATEGORY_UNMAPPED in draft.review_flags:
            flags.add(ReviewFlag.CATEGORY_UNMAPPED)

    status = None
    if flags - stored.review_flags and stored.status is RecordStatus.ACTIVE:
        status = RecordStatus.PENDING_REVIEW

    return FieldPatch(
        values=values,
        field_sources=field_sources,
        tags=tags if tags != stored.tags else None,
        category=category,
        review_flags=frozenset(flags) if flags != stored.review_flags else None,
        status=status,
        add_source=None if draft.source in stored.sources else draft.source,
    )


def _may_replace(owner: Provider | None, incoming: Provider, config: ImportConfig) -> bool:
    if owner is None:
        return False
    if owner is incoming:
        return True
    return config.priority_of(incoming) > config.priority_of(owner)
