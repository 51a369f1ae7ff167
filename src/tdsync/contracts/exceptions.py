"""Exception hierarchy for tdsync."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tdsync.contracts.sync import SyncResult


class TdSyncError(Exception):
    """Base exception for all tdsync errors."""


class ConfigError(TdSyncError):
    """Configuration loading or validation failure."""


class ProviderError(TdSyncError):
    """Base remote provider operation failure."""


class ProviderUnavailableError(ProviderError):
    """Provider cannot be used in the current environment (missing CLI, credentials, remote)."""


class TransitionNotFoundError(ProviderError):
    """Jira workflow offers no transition into the requested status category."""

    def __init__(self, message: str, *, issue_key: str, category: str) -> None:
        super().__init__(message)
        self.issue_key = issue_key
        self.category = category


class LocalTrackerError(TdSyncError):
    """The local ``td`` CLI failed or produced unparseable output."""


class SyncStateError(TdSyncError):
    """Sync state file could not be read, parsed, or written."""


class SyncError(TdSyncError):
    """Engine-level synchronization failure.

    ``result`` holds whatever was accomplished before the failure, when the
    failure happened after per-issue work had started.
    """

    def __init__(self, message: str, *, result: SyncResult | None = None) -> None:
        super().__init__(message)
        self.result = result
