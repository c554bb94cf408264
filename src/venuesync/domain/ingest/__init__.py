"""Import coordination: validation, merge policy and the run summary."""

from __future__ import annotations

from .coordinator import ImportCoordinator
from .merge import build_patch
from .summary import Issue, IssueKind, RunSummary
from .validation import (
    MISSING_NAME_AND_ADDRESS,
    MISSING_NATIVE_ID,
    PRICE_TIER_OUT_OF_RANGE,
    price_tier_range,
    validate_draft,
)

__all__ = [
    "MISSING_NAME_AND_ADDRESS",
    "MISSING_NATIVE_ID",
    "PRICE_TIER_OUT_OF_RANGE",
    "ImportCoordinator",
    "Issue",
    "IssueKind",
    "RunSummary",
    "build_patch",
    "price_tier_range",
    "validate_draft",
]
