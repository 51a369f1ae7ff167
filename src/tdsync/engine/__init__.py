"""Engine module exports."""

from tdsync.engine.engine import PHASE_PULL, PHASE_PUSH, PHASE_PUSH_ONE, SyncEngine
from tdsync.engine.progress import NullSyncProgress, SyncProgress

__all__ = ["PHASE_PULL", "PHASE_PUSH", "PHASE_PUSH_ONE", "NullSyncProgress", "SyncEngine", "SyncProgress"]
