"""Outcomes of matching a draft against stored candidates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from uuid import UUID


class ResolutionStatus(StrEnum):
    NO_MATCH = "no_match"
    MATCH_EXISTING = "match_existing"
    AMBIGUOUS = "ambiguous"


class MatchKind(StrEnum):
    """Which tier of the matching strategy produced the outcome."""

    EXACT_SOURCE = "exact_source"
    STRONG = "strong"
    WEAK = "weak"
    NAME_ONLY = "name_only"


@dataclass(slots=True, frozen=True, kw_only=True)
class NoMatch:
    """Draft describes a venue the store does not know yet."""

    reason: str | None = None
    status: Literal[ResolutionStatus.NO_MATCH] = ResolutionStatus.NO_MATCH


@dataclass(slots=True, frozen=True, kw_only=True)
class MatchExisting:
    """Draft describes exactly one stored venue."""

    venue_id: UUID
    match_kind: MatchKind
    reason: str | None = None
    status: Literal[ResolutionStatus.MATCH_EXISTING] = ResolutionStatus.MATCH_EXISTING


@dataclass(slots=True, frozen=True, kw_only=True)
class AmbiguousMatch:
    """Draft may describe one of several stored venues; a person decides."""

    venue_ids: tuple[UUID, ...]
    match_kind: MatchKind
    reason: str | None = None
    status: Literal[ResolutionStatus.AMBIGUOUS] = ResolutionStatus.AMBIGUOUS

    def __post_init__(self) -> None:
        if not self.venue_ids:
            raise ValueError("Ambiguous match must include at least one candidate")


type Resolution = NoMatch | MatchExisting | AmbiguousMatch
