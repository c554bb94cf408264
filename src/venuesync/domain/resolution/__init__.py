"""Match resolution between drafts and stored venues."""

from __future__ import annotations

from .contracts import (
    AmbiguousMatch,
    MatchExisting,
    MatchKind,
    NoMatch,
    Resolution,
    ResolutionStatus,
)
from .resolve import resolve

__all__ = [
    "AmbiguousMatch",
    "MatchExisting",
    "MatchKind",
    "NoMatch",
    "Resolution",
    "ResolutionStatus",
    "resolve",
]
