"""Error taxonomy of the ingestion pipeline.

Provider and record errors are per-item or per-provider conditions that the
coordinator records and moves past. ``StoreUnavailableError`` is the only
condition that aborts a run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from venuesync.domain.ingest.summary import RunSummary
    from venuesync.domain.model import Provider


class ProviderError(RuntimeError):
    """Base class for conditions raised while talking to a provider."""

    def __init__(self, provider: Provider, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.detail = message


class ProviderUnavailableError(ProviderError):
    """Network failure, timeout or non-2xx status from a provider."""

    def __init__(
        self,
        provider: Provider,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(provider, message)
        self.status_code = status_code


class ProviderSchemaMismatchError(ProviderError):
    """Provider response is not JSON or lacks the expected shape."""

    def __init__(
        self,
        provider: Provider,
        message: str,
        *,
        native_id: str | None = None,
    ) -> None:
        super().__init__(provider, message)
        self.native_id = native_id


class InvalidRecordError(ValueError):
    """Draft violates a canonical record invariant."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class StoreError(RuntimeError):
    """Base class for store failures."""


class StoreUnavailableError(StoreError):
    """The store cannot be reached; fatal to the whole run."""

    def __init__(self, message: str, *, summary: RunSummary | None = None) -> None:
        super().__init__(message)
        self.summary = summary


class DuplicateSourceError(StoreError):
    """A provider-native identifier is already attached to another venue."""
