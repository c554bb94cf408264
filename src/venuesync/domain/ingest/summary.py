"""Run summary returned by an import."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from venuesync.domain.model import Provider, SourceRef


class IssueKind(StrEnum):
    AMBIGUOUS_MATCH = "ambiguous_match"
    INVALID_RECORD = "invalid_record"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    SCHEMA_MISMATCH = "schema_mismatch"


@dataclass(slots=True, frozen=True, kw_only=True)
class Issue:
    kind: IssueKind
    provider: Provider
    reason: str
    source: SourceRef | None = None
    venue_ids: tuple[UUID, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": str(self.kind),
            "provider": str(self.provider),
            "reason": self.reason,
            "source": str(self.source) if self.source is not None else None,
            "venue_ids": [str(venue_id) for venue_id in self.venue_ids],
        }


@dataclass(slots=True)
class RunSummary:
    """Counters and issues accumulated over one import run."""

    inserted: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped_ambiguous: int = 0
    rejected_invalid: int = 0
    provider_errors: int = 0
    ambiguous: list[Issue] = field(default_factory=list[Issue])
    rejected: list[Issue] = field(default_factory=list[Issue])
    provider_issues: list[Issue] = field(default_factory=list[Issue])

    def record_ambiguous(
        self, source: SourceRef, venue_ids: Iterable[UUID], *, reason: str
    ) -> None:
        self.skipped_ambiguous += 1
        self.ambiguous.append(
            Issue(
                kind=IssueKind.AMBIGUOUS_MATCH,
                provider=source.provider,
                reason=reason,
                source=source,
                venue_ids=tuple(venue_ids),
            )
        )

    def record_invalid(self, source: SourceRef, *, reason: str) -> None:
        self.rejected_invalid += 1
        self.rejected.append(
            Issue(
                kind=IssueKind.INVALID_RECORD,
                provider=source.provider,
                reason=reason,
                source=source,
            )
        )

    def record_provider_error(
        self,
        provider: Provider,
        *,
        kind: IssueKind,
        reason: str,
        source: SourceRef | None = None,
    ) -> None:
        self.provider_errors += 1
        self.provider_issues.append(
            Issue(kind=kind, provider=provider, reason=reason, source=source)
        )

    @property
    def processed(self) -> int:
        return (
            self.inserted
            + self.updated
            + self.unchanged
            + self.skipped_ambiguous
            + self.rejected_invalid
        )

    def to_dict(self) -> dict[str, object]:
        """Flat JSON-safe view for reports."""

        return {
            "inserted": self.inserted,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "skipped_ambiguous": self.skipped_ambiguous,
            "rejected_invalid": self.rejected_invalid,
            "provider_errors": self.provider_errors,
            "ambiguous": [issue.to_dict() for issue in self.ambiguous],
            "rejected": [issue.to_dict() for issue in self.rejected],
            "provider_issues": [issue.to_dict() for issue in self.provider_issues],
        }
