"""SQLAlchemy table metadata for canonical venues."""

from __future__ import annotations

import json
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

from venuesync.domain.model import Category, Provider, RecordStatus, ReviewFlag, VenueField

if TYPE_CHECKING:
    from collections.abc import Mapping


UUIDColumnType = Uuid[uuid.UUID]

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(UTC)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _load_json_list(value: str | None) -> list[str]:
    if value is None:
        return []
    loaded = json.loads(value)
    if not isinstance(loaded, list):
        return []
    items = cast(list[Any], loaded)
    return [item for item in items if isinstance(item, str)]


class TagSetType(TypeDecorator[frozenset[str]]):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value: frozenset[str] | None, dialect: Dialect) -> str:
        _ = dialect
        return json.dumps(sorted(value or ()))

    def process_result_value(self, value: str | None, dialect: Dialect) -> frozenset[str]:
        _ = dialect
        return frozenset(_load_json_list(value))


class ReviewFlagSetType(TypeDecorator[frozenset[ReviewFlag]]):
    impl = String(255)
    cache_ok = True

    def process_bind_param(
        self, value: frozenset[ReviewFlag] | None, dialect: Dialect
    ) -> str:
        _ = dialect
        return json.dumps(sorted(flag.value for flag in value or ()))

    def process_result_value(
        self, value: str | None, dialect: Dialect
    ) -> frozenset[ReviewFlag]:
        _ = dialect
        known = {flag.value for flag in ReviewFlag}
        return frozenset(ReviewFlag(item) for item in _load_json_list(value) if item in known)


class FieldSourcesType(TypeDecorator[dict[VenueField, Provider]]):
    """Per-field provenance stored as a JSON object of field name to provider."""

    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: Mapping[VenueField, Provider] | None, dialect: Dialect
    ) -> str:
        _ = dialect
        payload = {str(field): str(provider) for field, provider in (value or {}).items()}
        return json.dumps(payload, sort_keys=True)

    def process_result_value(
        self, value: str | None, dialect: Dialect
    ) -> dict[VenueField, Provider]:
        _ = dialect
        if value is None:
            return {}
        loaded = json.loads(value)
        if not isinstance(loaded, dict):
            return {}
        items = cast(dict[Any, Any], loaded)
        fields = {field.value for field in VenueField}
        providers = {provider.value for provider in Provider}
        return {
            VenueField(key): Provider(item)
            for key, item in items.items()
            if key in fields and item in providers
        }


metadata = MetaData(naming_convention=NAMING_CONVENTION)

venue_table = Table(
    "venue",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String(255), nullable=True),
    Column(
        "category",
        Enum(Category, native_enum=False, length=32),
        nullable=False,
        default=Category.UNCATEGORIZED,
    ),
    Column(
        "status",
        Enum(RecordStatus, native_enum=False, length=32),
        nullable=False,
        default=RecordStatus.ACTIVE,
    ),
    Column("tags", TagSetType(), nullable=False, default=frozenset),
    Column("review_flags", ReviewFlagSetType(), nullable=False, default=frozenset),
    Column("price_tier", Integer, nullable=True),
    Column("street", String(255), nullable=True),
    Column("city", String(128), nullable=True),
    Column("region", String(64), nullable=True),
    Column("postal_code", String(32), nullable=True),
    Column("neighborhood", String(128), nullable=True),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    Column("address_key", String(255), nullable=True),
    Column("phone", String(64), nullable=True),
    Column("website", String(1024), nullable=True),
    Column("description", Text, nullable=True),
    Column("image_url", String(1024), nullable=True),
    Column("rating", Float, nullable=True),
    Column("review_count", Integer, nullable=True),
    Column("field_sources", FieldSourcesType(), nullable=False, default=dict),
    Column("created_at", UTCDateTime(), nullable=False, default=utcnow),
    Column("updated_at", UTCDateTime(), nullable=False, default=utcnow, onupdate=utcnow),
    Index("ix_venue_category_neighborhood", "category", "neighborhood"),
    Index("ix_venue_address_key", "address_key"),
)

venue_source_table = Table(
    "venue_source",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "venue_id",
        UUIDColumnType,
        ForeignKey("venue.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("provider", Enum(Provider, native_enum=False, length=32), nullable=False),
    Column("native_id", String(255), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False, default=utcnow),
    UniqueConstraint("provider", "native_id"),
)
