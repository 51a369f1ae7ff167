"""Public contracts shared across tdsync layers."""

from tdsync.contracts.config import (
    GitHubIntegrationConfig,
    IntegrationsConfig,
    JiraIntegrationConfig,
    TdSyncConfig,
)
from tdsync.contracts.exceptions import (
    ConfigError,
    LocalTrackerError,
    ProviderError,
    ProviderUnavailableError,
    SyncError,
    SyncStateError,
    TdSyncError,
    TransitionNotFoundError,
)
from tdsync.contracts.issue import EPOCH, IssueStatus, IssueType, LocalIssue, RemoteIssue
from tdsync.contracts.mapper import Mapper
from tdsync.contracts.provider import Provider
from tdsync.contracts.sync import SyncResult, SyncState, SyncStateEntry

__all__ = [
    "EPOCH",
    "ConfigError",
    "GitHubIntegrationConfig",
    "IntegrationsConfig",
    "IssueStatus",
    "IssueType",
    "JiraIntegrationConfig",
    "LocalIssue",
    "LocalTrackerError",
    "Mapper",
    "Provider",
    "ProviderError",
    "ProviderUnavailableError",
    "RemoteIssue",
    "SyncError",
    "SyncResult",
    "SyncState",
    "SyncStateEntry",
    "SyncStateError",
    "TdSyncConfig",
    "TdSyncError",
    "TransitionNotFoundError",
]
