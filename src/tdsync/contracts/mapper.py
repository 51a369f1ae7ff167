"""Mapper contract: field translation between ``td`` and one remote tracker."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tdsync.contracts.issue import LocalIssue, RemoteIssue


class Mapper(ABC):
    """Translates issues between the local schema and a provider's remote schema.

    ``to_remote`` and ``to_local`` are total: unknown values fall back to
    defaults instead of raising.
    """

    @property
    @abstractmethod
    def sync_label_prefix(self) -> str: ...  # pragma: no cover

    def sync_label(self, external_id: str) -> str:
        """Marker label recording which remote issue a local issue is paired with."""
        return f"{self.sync_label_prefix}{external_id}"

    @abstractmethod
    def is_internal_label(self, label: str) -> bool: ...  # pragma: no cover

    @abstractmethod
    def to_remote(self, issue: LocalIssue) -> RemoteIssue: ...  # pragma: no cover

    @abstractmethod
    def to_local(self, issue: RemoteIssue) -> LocalIssue: ...  # pragma: no cover

    def user_labels(self, labels: list[str]) -> list[str]:
        return [label for label in labels if not self.is_internal_label(label)]
