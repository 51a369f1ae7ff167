"""Provider adapter contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from types import TracebackType

from tdsync.contracts.issue import RemoteIssue
from tdsync.contracts.mapper import Mapper


class Provider(ABC):
    """Remote CRUD and state transitions against one external issue tracker.

    Providers are async context managers; enter them before calling any
    operation so transports can be opened and closed cleanly.
    """

    @property
    @abstractmethod
    def id(self) -> str: ...  # pragma: no cover

    @property
    @abstractmethod
    def name(self) -> str: ...  # pragma: no cover

    @property
    @abstractmethod
    def mapper(self) -> Mapper: ...  # pragma: no cover

    @abstractmethod
    async def __aenter__(self) -> Provider: ...  # pragma: no cover

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...  # pragma: no cover

    @abstractmethod
    async def check_available(self, work_dir: Path) -> None:
        """Verify the provider can be used from *work_dir*.

        Raises:
            ProviderUnavailableError: With the reason the provider cannot be used.
        """

    @abstractmethod
    async def list_issues(self, work_dir: Path) -> list[RemoteIssue]: ...  # pragma: no cover

    @abstractmethod
    async def create_issue(self, work_dir: Path, issue: RemoteIssue) -> str:
        """Create *issue* remotely and return its external ID."""

    @abstractmethod
    async def update_issue(self, work_dir: Path, external_id: str, issue: RemoteIssue) -> None: ...  # pragma: no cover

    @abstractmethod
    async def close_issue(self, work_dir: Path, external_id: str) -> None: ...  # pragma: no cover

    @abstractmethod
    async def reopen_issue(self, work_dir: Path, external_id: str) -> None: ...  # pragma: no cover
