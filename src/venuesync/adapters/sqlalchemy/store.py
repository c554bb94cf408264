"""SQLAlchemy-backed venue store."""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, create_engine, func, insert, or_, select, update
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from venuesync.adapters.sqlalchemy.mappings import venue_source_table, venue_table
from venuesync.adapters.sqlalchemy.migrations import upgrade_head
from venuesync.config.storage import get_database_config
from venuesync.domain.errors import DuplicateSourceError, StoreUnavailableError
from venuesync.domain.model import (
    Address,
    Coordinates,
    SourceRef,
    StoredVenue,
    VenueField,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from sqlalchemy import ColumnElement, Row, Select
    from sqlalchemy.engine import Engine

    from venuesync.domain.model import FieldPatch, NewVenue
    from venuesync.domain.ports import CandidateFilter

log = logging.getLogger(__name__)

_ADDRESS_COLUMNS = ("street", "city", "region", "postal_code", "neighborhood", "address_key")
# Named constraint on PostgreSQL and friends, column list on SQLite.
_DUPLICATE_SOURCE_MARKERS = (
    "uq_venue_source_provider",
    "venue_source.provider, venue_source.native_id",
)


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy store is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call venuesync.adapters.sqlalchemy."
                "store.startup() before opening a store."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the engine and bring the schema up to date."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    resolved_engine = engine or engine_for(database_uri or get_database_config().uri)
    try:
        upgrade_head(engine=resolved_engine)
    except (OperationalError, InterfaceError) as exc:
        raise StoreUnavailableError(f"cannot migrate database: {exc.orig}") from exc
    _STATE.engine = resolved_engine


def engine_for(uri: str) -> Engine:
    """Create an engine whose connections may be used from worker threads.

    An in-memory SQLite database lives in a single connection, so it is shared
    through a ``StaticPool``.
    """

    url = make_url(uri)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    return create_engine(url, future=True)


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class SqlAlchemyVenueStore:
    """``VenueStore`` over the ``venue`` and ``venue_source`` tables.

    Every call runs in its own transaction. Connection level failures surface
    as ``StoreUnavailableError`` and a provider id that already belongs to a
    venue surfaces as ``DuplicateSourceError``. Any other integrity error is
    a bug and propagates unchanged.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        if engine is None:
            self.session_factory = _STATE.session_factory
        else:
            self.session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    def query(self, candidate_filter: CandidateFilter) -> list[StoredVenue]:
        stmt = self._filtered(candidate_filter)
        with self._transaction() as session:
            rows = session.execute(stmt).all()
            sources = self._sources_for(session, [row.id for row in rows])
        return [_to_stored(row, sources.get(row.id, ())) for row in rows]

    def insert(self, venue: NewVenue) -> uuid.UUID:
        values = {
            "name": venue.name,
            "category": venue.category,
            "status": venue.status,
            "tags": venue.tags,
            "review_flags": venue.review_flags,
            "price_tier": venue.price_tier,
            "phone": venue.phone,
            "website": venue.website,
            "description": venue.description,
            "image_url": venue.image_url,
            "rating": venue.rating,
            "review_count": venue.review_count,
            "field_sources": dict(venue.field_sources),
            **_address_values(venue.address),
        }
        venue_id = uuid.uuid4()
        with self._transaction() as session:
            session.execute(insert(venue_table).values(id=venue_id, **values))
            if venue.source is not None:
                self._attach_source(session, venue_id, venue.source)
        log.debug("Inserted venue %s", venue_id)
        return venue_id

    def update(self, venue_id: uuid.UUID, patch: FieldPatch) -> None:
        with self._transaction() as session:
            if patch.changes_fields:
                current = session.execute(
                    select(venue_table.c.field_sources).where(venue_table.c.id == venue_id)
                ).scalar_one()
                values: dict[str, Any] = {}
                for venue_field, value in patch.values.items():
                    if venue_field is VenueField.ADDRESS and isinstance(value, Address):
                        values.update(_address_values(value))
                    else:
                        values[venue_field.value] = value
                if patch.tags is not None:
                    values["tags"] = patch.tags
                if patch.category is not None:
                    values["category"] = patch.category
                if patch.review_flags is not None:
                    values["review_flags"] = patch.review_flags
                if patch.status is not None:
                    values["status"] = patch.status
                values["field_sources"] = {**current, **patch.field_sources}
                session.execute(
                    update(venue_table).where(venue_table.c.id == venue_id).values(**values)
                )
            if patch.add_source is not None:
                self._attach_source(session, venue_id, patch.add_source)

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        try:
            with self.session_factory.begin() as session:
                yield session
        except IntegrityError as exc:
            if not _is_duplicate_source(exc):
                raise
            raise DuplicateSourceError(str(exc.orig)) from exc
        except (OperationalError, InterfaceError) as exc:
            raise StoreUnavailableError(f"database unavailable: {exc.orig}") from exc

    @staticmethod
    def _attach_source(session: Session, venue_id: uuid.UUID, source: SourceRef) -> None:
        session.execute(
            insert(venue_source_table).values(
                venue_id=venue_id,
                provider=source.provider,
                native_id=source.native_id,
            )
        )

    @staticmethod
    def _filtered(candidate_filter: CandidateFilter) -> Select[Any]:
        stmt = select(venue_table)
        if candidate_filter.source is not None:
            stmt = stmt.where(
                venue_table.c.id.in_(
                    select(venue_source_table.c.venue_id)
                    .where(venue_source_table.c.provider == candidate_filter.source.provider)
                    .where(venue_source_table.c.native_id == candidate_filter.source.native_id)
                )
            )
        if candidate_filter.category is not None:
            stmt = stmt.where(venue_table.c.category == candidate_filter.category)
        if candidate_filter.neighborhoods is not None:
            stmt = stmt.where(
                venue_table.c.neighborhood.in_(sorted(candidate_filter.neighborhoods))
            )
        if candidate_filter.address_contains:
            stmt = stmt.where(
                venue_table.c.address_key.contains(
                    candidate_filter.address_contains, autoescape=True
                )
            )
        locality = _locality_clause(candidate_filter)
        if locality is not None:
            stmt = stmt.where(locality)
        stmt = stmt.order_by(venue_table.c.created_at, venue_table.c.id)
        if candidate_filter.limit is not None:
            stmt = stmt.limit(candidate_filter.limit)
        return stmt

    @staticmethod
    def _sources_for(
        session: Session, venue_ids: Sequence[uuid.UUID]
    ) -> dict[uuid.UUID, tuple[SourceRef, ...]]:
        if not venue_ids:
            return {}
        stmt = (
            select(
                venue_source_table.c.venue_id,
                venue_source_table.c.provider,
                venue_source_table.c.native_id,
            )
            .where(venue_source_table.c.venue_id.in_(venue_ids))
            .order_by(venue_source_table.c.created_at, venue_source_table.c.id)
        )
        grouped: dict[uuid.UUID, list[SourceRef]] = defaultdict(list)
        for venue_id, provider, native_id in session.execute(stmt):
            grouped[venue_id].append(SourceRef(provider, native_id))
        return {venue_id: tuple(refs) for venue_id, refs in grouped.items()}


def _is_duplicate_source(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in _DUPLICATE_SOURCE_MARKERS)


def _locality_clause(candidate_filter: CandidateFilter) -> ColumnElement[bool] | None:
    matches: list[ColumnElement[bool]] = []
    if candidate_filter.postal_code:
        matches.append(
            func.substr(venue_table.c.postal_code, 1, 5) == candidate_filter.postal_code[:5]
        )
    if candidate_filter.city:
        matches.append(func.lower(venue_table.c.city) == candidate_filter.city.lower())
    if not matches:
        return None
    return or_(
        *matches,
        and_(venue_table.c.postal_code.is_(None), venue_table.c.city.is_(None)),
    )


def _address_values(address: Address | None) -> dict[str, Any]:
    if address is None:
        return {name: None for name in (*_ADDRESS_COLUMNS, "latitude", "longitude")}
    coordinates = address.coordinates
    return {
        "street": address.street,
        "city": address.city,
        "region": address.region,
        "postal_code": address.postal_code,
        "neighborhood": address.neighborhood,
        "address_key": address.key,
        "latitude": coordinates.latitude if coordinates else None,
        "longitude": coordinates.longitude if coordinates else None,
    }


def _to_address(row: Row[Any]) -> Address | None:
    coordinates = (
        Coordinates(row.latitude, row.longitude)
        if row.latitude is not None and row.longitude is not None
        else None
    )
    if coordinates is None and all(getattr(row, name) is None for name in _ADDRESS_COLUMNS):
        return None
    return Address(
        street=row.street,
        city=row.city,
        region=row.region,
        postal_code=row.postal_code,
        neighborhood=row.neighborhood,
        coordinates=coordinates,
        key=row.address_key,
    )


def _to_stored(row: Row[Any], sources: tuple[SourceRef, ...]) -> StoredVenue:
    return StoredVenue(
        id=row.id,
        name=row.name,
        category=row.category,
        status=row.status,
        tags=row.tags,
        review_flags=row.review_flags,
        price_tier=row.price_tier,
        address=_to_address(row),
        phone=row.phone,
        website=row.website,
        description=row.description,
        image_url=row.image_url,
        rating=row.rating,
        review_count=row.review_count,
        sources=sources,
        field_sources=row.field_sources,
    )
