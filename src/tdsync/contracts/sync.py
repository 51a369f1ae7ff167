"""Sync state and sync result contracts.

The on-disk field names (``providerID``, ``externalID``, ``tdUpdatedAt`` ...)
are kept as aliases so state files stay readable across releases.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tdsync.contracts.issue import EPOCH, coerce_timestamp, ensure_aware


class SyncStateEntry(BaseModel):
    """Pairing of one local issue with one remote issue."""

    model_config = ConfigDict(populate_by_name=True)

    external_id: str = Field(alias="externalID")
    local_updated_at: datetime = Field(default=EPOCH, alias="tdUpdatedAt")
    remote_updated_at: datetime = Field(default=EPOCH, alias="extUpdatedAt")

    @field_validator("local_updated_at", "remote_updated_at", mode="before")
    @classmethod
    def timestamps_not_null(cls, value: Any) -> Any:
        return coerce_timestamp(value)

    @field_validator("local_updated_at", "remote_updated_at")
    @classmethod
    def timestamps_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class SyncState(BaseModel):
    """Per-provider mapping of local issue IDs to remote issues."""

    model_config = ConfigDict(populate_by_name=True)

    provider_id: str = Field(alias="providerID")
    provider_meta: dict[str, str] | None = Field(default=None, alias="providerMeta")
    issues: dict[str, SyncStateEntry] = Field(default_factory=dict)

    @field_validator("issues", mode="before")
    @classmethod
    def issues_not_null(cls, value: Any) -> Any:
        return {} if value is None else value

    def find_by_local_id(self, local_id: str) -> SyncStateEntry | None:
        return self.issues.get(local_id)

    def find_by_external_id(self, external_id: str) -> tuple[str, SyncStateEntry | None]:
        """Return ``(local_id, entry)`` for *external_id*, or ``("", None)``."""
        for local_id, entry in self.issues.items():
            if entry.external_id == external_id:
                return local_id, entry
        return "", None


class SyncResult(BaseModel):
    """Counters and non-fatal per-issue errors from one sync call."""

    pulled: int = 0
    pushed: int = 0
    errors: list[str] = Field(default_factory=list)
