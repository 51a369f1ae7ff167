"""Public API surface for tdsync."""

__version__ = "0.1.0"

from tdsync.config import load_config, write_config
from tdsync.contracts.config import TdSyncConfig
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
from tdsync.contracts.issue import LocalIssue, RemoteIssue
from tdsync.contracts.mapper import Mapper
from tdsync.contracts.provider import Provider
from tdsync.contracts.sync import SyncResult, SyncState, SyncStateEntry
from tdsync.engine.engine import SyncEngine
from tdsync.engine.progress import NullSyncProgress, SyncProgress
from tdsync.local import TdClient
from tdsync.providers import (
    GitHubProvider,
    JiraProvider,
    configured_providers,
    create_provider,
    default_push_provider,
)
from tdsync.state import load_state, save_state

__all__ = [
    "ConfigError",
    "GitHubProvider",
    "JiraProvider",
    "LocalIssue",
    "LocalTrackerError",
    "Mapper",
    "NullSyncProgress",
    "Provider",
    "ProviderError",
    "ProviderUnavailableError",
    "RemoteIssue",
    "SyncEngine",
    "SyncError",
    "SyncProgress",
    "SyncResult",
    "SyncState",
    "SyncStateEntry",
    "SyncStateError",
    "TdClient",
    "TdSyncConfig",
    "TdSyncError",
    "TransitionNotFoundError",
    "configured_providers",
    "create_provider",
    "default_push_provider",
    "load_config",
    "load_state",
    "save_state",
    "write_config",
]
