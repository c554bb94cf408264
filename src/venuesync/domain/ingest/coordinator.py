"""Drive adapters, normalization, matching and persistence for one import run.

Each provider runs in its own task and feeds normalized drafts into a queue.
A single writer task drains the queue, so every "query candidates, decide,
write" sequence against the store runs strictly one after another. The store
is synchronous, so each sequence runs in a worker thread and the fetch tasks
keep going while it waits on the database.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import TYPE_CHECKING

from venuesync.domain.errors import (
    DuplicateSourceError,
    InvalidRecordError,
    ProviderSchemaMismatchError,
    ProviderUnavailableError,
    StoreUnavailableError,
)
from venuesync.domain.model import Category, NewVenue, RecordStatus, SourceRef
from venuesync.domain.normalization import normalize_draft
from venuesync.domain.ports import CandidateFilter
from venuesync.domain.resolution import AmbiguousMatch, MatchExisting, resolve

from .merge import build_patch
from .summary import IssueKind, RunSummary
from .validation import validate_draft

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from venuesync.config.ingest import ImportConfig
    from venuesync.domain.model import Provider, StoredVenue, VenueDraft
    from venuesync.domain.ports import ProviderAdapter, ProviderQuery, VenueStore

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class _ProviderDone:
    provider: Provider


type _QueueEntry = VenueDraft | _ProviderDone


class ImportCoordinator:
    """Import venues from a set of provider adapters into one store."""

    def __init__(
        self,
        *,
        adapters: Sequence[ProviderAdapter],
        store: VenueStore,
        config: ImportConfig,
    ) -> None:
        self._adapters = tuple(adapters)
        self._store = store
        self._config = config

    async def run(self, query: ProviderQuery) -> RunSummary:
        """Import everything the adapters yield for ``query``.

        Provider failures are recorded in the summary. A store failure aborts
        the run with ``StoreUnavailableError`` carrying the partial summary.
        """

        summary = RunSummary()
        queue: asyncio.Queue[_QueueEntry] = asyncio.Queue()
        log.info(
            "Starting import from %s",
            ", ".join(str(adapter.provider) for adapter in self._adapters) or "no providers",
        )

        writer = asyncio.create_task(
            self._consume(queue, summary, producers=len(self._adapters)),
            name="venue-writer",
        )
        producers = [
            asyncio.create_task(
                self._produce(adapter, query, queue, summary),
                name=f"fetch-{adapter.provider}",
            )
            for adapter in self._adapters
        ]
        try:
            await writer
        except StoreUnavailableError as exc:
            exc.summary = summary
            log.error("Import aborted, store unavailable: %s", exc)  # noqa: TRY400
            raise
        finally:
            for task in producers:
                if not task.done():
                    task.cancel()
            outcomes = await asyncio.gather(*producers, return_exceptions=True)
        for outcome in outcomes:
            if isinstance(outcome, BaseException) and not isinstance(
                outcome, asyncio.CancelledError
            ):
                raise outcome

        log.info(
            "Import finished: inserted=%d updated=%d unchanged=%d ambiguous=%d "
            "invalid=%d provider_errors=%d",
            summary.inserted,
            summary.updated,
            summary.unchanged,
            summary.skipped_ambiguous,
            summary.rejected_invalid,
            summary.provider_errors,
        )
        return summary

    async def _produce(
        self,
        adapter: ProviderAdapter,
        query: ProviderQuery,
        queue: asyncio.Queue[_QueueEntry],
        summary: RunSummary,
    ) -> None:
        provider = adapter.provider
        timeout = self._config.fetch_timeout_seconds
        queued = 0
        try:
            async with asyncio.timeout(timeout):
                async with aclosing(adapter.fetch_batch(query)) as items:
                    async for item in items:
                        try:
                            draft = adapter.translate(item)
                        except ProviderSchemaMismatchError as exc:
                            log.warning("Skipping malformed %s item: %s", provider, exc.detail)
                            summary.record_provider_error(
                                provider,
                                kind=IssueKind.SCHEMA_MISMATCH,
                                reason=exc.detail,
                                source=(
                                    SourceRef(provider, exc.native_id)
                                    if exc.native_id
                                    else None
                                ),
                            )
                            continue
                        queue.put_nowait(normalize_draft(draft, self._config))
                        queued += 1
        except TimeoutError:
            log.warning("Provider %s exceeded the %.0fs fetch timeout", provider, timeout)
            summary.record_provider_error(
                provider,
                kind=IssueKind.PROVIDER_UNAVAILABLE,
                reason=f"fetch timed out after {timeout:g}s",
            )
        except ProviderUnavailableError as exc:
            log.warning("Provider %s unavailable: %s", provider, exc.detail)
            summary.record_provider_error(
                provider, kind=IssueKind.PROVIDER_UNAVAILABLE, reason=exc.detail
            )
        except ProviderSchemaMismatchError as exc:
            log.error(  # noqa: TRY400
                "Provider %s returned an unexpected response: %s", provider, exc.detail
            )
            summary.record_provider_error(
                provider, kind=IssueKind.SCHEMA_MISMATCH, reason=exc.detail
            )
        finally:
            log.info("Provider %s queued %d drafts", provider, queued)
            queue.put_nowait(_ProviderDone(provider))

    async def _consume(
        self,
        queue: asyncio.Queue[_QueueEntry],
        summary: RunSummary,
        *,
        producers: int,
    ) -> None:
        remaining = producers
        while remaining:
            entry = await queue.get()
            if isinstance(entry, _ProviderDone):
                remaining -= 1
                continue
            await asyncio.to_thread(self._apply, entry, summary)

    def _apply(self, draft: VenueDraft, summary: RunSummary) -> None:
        try:
            validate_draft(draft, self._config)
        except InvalidRecordError as exc:
            log.debug("Rejected %s: %s", draft.source, exc.reason)
            summary.record_invalid(draft.source, reason=exc.reason)
            return

        candidates = self._candidates(draft)
        resolution = resolve(draft, candidates)

        if isinstance(resolution, AmbiguousMatch):
            log.debug(
                "Ambiguous match for %s (%s): %d candidates",
                draft.source,
                resolution.reason,
                len(resolution.venue_ids),
            )
            summary.record_ambiguous(
                draft.source,
                resolution.venue_ids,
                reason=resolution.reason or str(resolution.match_kind),
            )
            return

        if isinstance(resolution, MatchExisting):
            stored = next(c for c in candidates if c.id == resolution.venue_id)
            patch = build_patch(stored, draft, self._config)
            if patch.is_empty:
                summary.unchanged += 1
                return
            try:
                self._store.update(stored.id, patch)
            except DuplicateSourceError as exc:
                summary.record_invalid(draft.source, reason=f"duplicate_source: {exc}")
                return
            log.debug(
                "Updated venue %s from %s (%s)", stored.id, draft.source, resolution.match_kind
            )
            summary.updated += 1
            return

        status = RecordStatus.PENDING_REVIEW if draft.needs_review else RecordStatus.ACTIVE
        try:
            venue_id = self._store.insert(NewVenue.from_draft(draft, status=status))
        except DuplicateSourceError as exc:
            summary.record_invalid(draft.source, reason=f"duplicate_source: {exc}")
            return
        log.debug("Inserted venue %s from %s as %s", venue_id, draft.source, status)
        summary.inserted += 1

    def _candidates(self, draft: VenueDraft) -> list[StoredVenue]:
        limit = self._config.candidate_limit
        filters = [CandidateFilter(source=draft.source, limit=limit)]

        neighborhood = draft.address.neighborhood if draft.address is not None else None
        category = draft.category if draft.category is not Category.UNCATEGORIZED else None
        if category is not None or neighborhood is not None:
            filters.append(
                CandidateFilter(
                    category=category,
                    neighborhoods=(
                        self._config.neighbors_of(neighborhood) if neighborhood else None
                    ),
                    limit=limit,
                )
            )
        if draft.address is not None and draft.address.key:
            filters.append(
                CandidateFilter(
                    address_contains=draft.address.key,
                    postal_code=draft.address.postal_code,
                    city=draft.address.city,
                    limit=limit,
                )
            )

        merged: dict[UUID, StoredVenue] = {}
        for candidate_filter in filters:
            for venue in self._store.query(candidate_filter):
                merged.setdefault(venue.id, venue)
        return list(merged.values())
