"""Progress reporting for sync passes.

The engine emits one phase per call ("Pull", "Push", "Push one"). A phase is
announced twice: first without a total while the issue list is fetched, then
again once the count is known. Each handled issue is reported with whether it
added an entry to ``SyncResult.errors``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SyncProgress(ABC):
    """Observer for engine phases; the CLI renders it with Rich."""

    @abstractmethod
    def phase_start(self, phase: str, total: int | None = None) -> None: ...  # pragma: no cover

    @abstractmethod
    def item_done(self, phase: str, *, failed: bool = False) -> None:
        """One issue within *phase* was handled; *failed* when it produced a sync error."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str) -> None: ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """The pass was aborted, including by cancellation."""
        ...  # pragma: no cover


class NullSyncProgress(SyncProgress):
    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def item_done(self, phase: str, *, failed: bool = False) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
